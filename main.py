"""
main.py – GamerStore application entry point.
Bootstraps logging and the PySide6 QApplication and launches the main window.

Usage:  gamerstore [LOCATION]
        LOCATION is an in-app link such as "games?sort=release-date".
"""

import logging
import os
import sys

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QApplication

from main_window import MainWindow
from services.navigation import parse_location

LOG_LEVEL: str = os.environ.get("GAMERSTORE_LOG_LEVEL", "INFO").upper()


def main() -> None:
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    QApplication.setHighDpiScaleFactorRoundingPolicy(
        Qt.HighDpiScaleFactorRoundingPolicy.PassThrough
    )

    app = QApplication(sys.argv)
    app.setApplicationName("GamerStore")
    app.setApplicationDisplayName("GamerStore – Catálogo de juegos")
    app.setOrganizationName("GamerStore")

    # Qt strips its own options from argv; what remains is ours.
    args = app.arguments()[1:]
    start = parse_location(args[0] if args else "")

    window = MainWindow(start)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
