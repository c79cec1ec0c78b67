"""Application entry point and setup for the CourseDeck course browser."""

import logging
import sys

from PySide6.QtGui import QFont, QGuiApplication
from PySide6.QtWidgets import QApplication

from coursedeck.core.courses import CourseRepository
from coursedeck.core.selection import CourseSelectionState
from coursedeck.core.settings import Settings
from coursedeck.ui.main_window import MainWindow


def configure_logging(level: str = "INFO") -> None:
    """Configure application-wide logging with a standard format."""
    numeric = getattr(logging, level.upper(), None)
    logging.basicConfig(
        level=numeric if isinstance(numeric, int) else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def run() -> None:
    """Load settings and course data, then start the main window."""
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    app = QApplication(sys.argv)
    app.setApplicationName("CourseDeck")
    app.setApplicationDisplayName("CourseDeck")

    app_font = QFont(app.font())
    app_font.setPointSize(11)
    QGuiApplication.setFont(app_font)

    repository = CourseRepository(settings.data_dir, unlock_all=settings.unlock_all)
    selection = CourseSelectionState(repository.all(), settings)

    window = MainWindow(selection=selection, settings=settings)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    run()
