"""Packaging for StudyFlow.

Install for development:
    pip install -e ".[test]"
    python -m studyflow
"""

from setuptools import setup, find_packages

setup(
    name="StudyFlow",
    version="0.1.0",
    description="Pomodoro study timer with session history and goals",
    packages=find_packages(include=["studyflow", "studyflow.*"]),
    python_requires=">=3.10",
    install_requires=[
        "PyQt6>=6.5",
        "SQLAlchemy>=2.0",
        "numpy>=1.24",
    ],
    extras_require={
        "test": ["pytest>=7"],
    },
    entry_points={
        "gui_scripts": ["studyflow = studyflow.__main__:main"],
    },
)
