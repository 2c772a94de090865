"""Allow running StudyFlow as a module: python -m studyflow."""

import argparse
import logging
import sys

from PyQt6.QtWidgets import QApplication

from .database.db import init_db
from .settings import SettingsProvider
from .audio.sounds import SoundManager
from .app import MainWindow


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="studyflow", description="Pomodoro study timer.")
    parser.add_argument("--debug", action="store_true", help="verbose logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )

    init_db()

    app = QApplication(sys.argv[:1])
    app.setApplicationName("StudyFlow")
    app.setOrganizationName("StudyFlow")

    provider = SettingsProvider(parent=app)
    window = MainWindow(provider, sounds=SoundManager(parent=app))
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
