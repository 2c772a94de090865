#!/usr/bin/env python3
"""StudyFlow — entry point.

Run with:
    python main.py
    python -m studyflow
"""

from studyflow.__main__ import main


if __name__ == "__main__":
    main()
