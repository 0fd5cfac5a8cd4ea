"""Application bootstrap: logging, configuration, session and main window."""

import logging
import sys
from typing import Optional, Sequence

from .config import load_settings
from .database import get_setting
from .session import Session


def configure_logging(level_name: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level_name, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main(scripts: Sequence[str] = (), database: Optional[str] = None) -> int:
    """Start the GUI and return its exit code."""
    settings = load_settings(get_setting=get_setting)
    configure_logging(settings.log_level)

    session = Session.from_settings(settings)
    if database:
        session.set_database(database)

    from PyQt6.QtWidgets import QApplication
    from .qt import MainWindow

    app = QApplication(sys.argv[:1])
    app.setApplicationName("SQLScratch")
    window = MainWindow(settings, session, list(scripts))
    window.show()
    return app.exec()
