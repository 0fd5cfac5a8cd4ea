"""
Qt implementation of the host editor interface.

Commands see the current script tab through this adapter; prompts are
modal QInputDialogs, so each command blocks until it completes.
"""

from contextlib import contextmanager
from typing import Optional, TYPE_CHECKING
from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QApplication, QInputDialog, QLineEdit, QMessageBox

from ..commands import HostEditor
from ..errors import StatementNotFound
from ..scripts import ScriptFile

if TYPE_CHECKING:
    from .main_window import MainWindow
    from .tabs.script_tab import ScriptTab


class QtHost(HostEditor):
    """HostEditor backed by the main window's current script tab."""

    def __init__(self, window: "MainWindow"):
        self.window = window

    def _tab(self) -> "ScriptTab":
        tab = self.window.current_tab()
        if tab is None:
            raise StatementNotFound("No script is open")
        return tab

    def buffer_text(self) -> str:
        return self._tab().editor.toPlainText()

    def cursor_position(self) -> int:
        return self._tab().editor.textCursor().position()

    def selected_text(self) -> str:
        return self._tab().editor.selected_text()

    def _ask(self, label: str, default: str, echo: QLineEdit.EchoMode) -> Optional[str]:
        text, ok = QInputDialog.getText(self.window, "SQLScratch", label, echo, default)
        return text if ok else None

    def prompt(self, label: str, default: str = "") -> Optional[str]:
        return self._ask(label, default, QLineEdit.EchoMode.Normal)

    def prompt_secret(self, label: str) -> Optional[str]:
        return self._ask(label, "", QLineEdit.EchoMode.Password)

    def show_message(self, message: str) -> None:
        QMessageBox.warning(self.window, "SQLScratch", message)

    def show_status(self, message: str) -> None:
        self.window.set_status(message, 3000)

    def show_result(self, text: str, title: str) -> None:
        self._tab().show_result(text, title)
        self.window.refresh_session_label()

    def open_script(self, script: ScriptFile) -> None:
        self.window.open_script(script)

    @contextmanager
    def busy(self):
        self.window.set_status("Running SQL*Plus...")
        QApplication.setOverrideCursor(Qt.CursorShape.WaitCursor)
        QApplication.processEvents()
        try:
            yield
        finally:
            QApplication.restoreOverrideCursor()
            self.window.set_status("Ready")
