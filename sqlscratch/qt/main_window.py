"""
Main application window for SQLScratch.

Holds the script tabs, the menus and shortcuts that trigger commands,
and a status bar showing the current user and database.
"""

import logging
import sqlite3
from pathlib import Path
from typing import Optional
from PyQt6.QtCore import QSettings, pyqtSignal
from PyQt6.QtGui import QAction, QKeySequence, QCloseEvent
from PyQt6.QtWidgets import (
    QMainWindow,
    QStatusBar,
    QLabel,
    QMessageBox,
    QApplication,
    QFileDialog,
)

from .theme import Theme
from .tab_widget import TabContainer
from .host import QtHost
from .tabs.script_tab import ScriptTab
from ..commands import SqlCommands
from ..config import Settings, load_settings
from ..database import get_setting, set_setting, load_open_tabs, save_open_tabs
from ..scripts import ScriptFile
from ..session import Session

_logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Main application window."""

    theme_changed = pyqtSignal()

    def __init__(self, settings: Settings, session: Session,
                 scripts: Optional[list] = None):
        super().__init__()

        from ..version import __version__
        self.setWindowTitle(f"SQLScratch v{__version__}")
        self.setMinimumSize(800, 500)

        self.settings = settings
        self.session = session
        self.host = QtHost(self)
        self.commands = SqlCommands(session, self.host, snippets_path=settings.snippets_path)

        Theme.set_dark(get_setting("dark_mode", "1") == "1")
        Theme.apply(QApplication.instance())

        self._create_actions()
        self._create_menu_bar()
        self._create_central_widget()
        self._create_status_bar()

        self._restore_state(scripts or [])
        self.theme_changed.connect(self._on_theme_changed)

    def _action(self, text: str, slot, shortcut: Optional[str] = None) -> QAction:
        action = QAction(text, self)
        if shortcut:
            action.setShortcut(QKeySequence(shortcut))
        action.triggered.connect(lambda checked=False: slot())
        return action

    def _create_actions(self) -> None:
        c = self.commands

        # File
        self.action_new = self._action("New Scratch Script", c.open_blank_scratch_script, "Ctrl+N")
        self.action_open = self._action("Open Script...", self._open_script_dialog, "Ctrl+O")
        self.action_snippets = self._action("Open Snippets", c.open_snippets_script, "Ctrl+Shift+O")
        self.action_save = self._action("Save", self._save_current, "Ctrl+S")
        self.action_save_as = self._action(
            "Save As...", lambda: self._save_current(save_as=True), "Ctrl+Shift+S")
        self.action_close_tab = self._action("Close Tab", self._close_current_tab, "Ctrl+W")
        self.action_settings = self._action("Settings...", self._show_settings, "Ctrl+,")
        self.action_exit = self._action("Exit", self.close, "Alt+F4")

        # Query
        self.action_run = self._action("Run Statement", c.run_selected_or_prompted_statement, "F5")
        self.action_run_line = self._action("Run Current Line", c.run_current_line, "Shift+F5")
        self.action_run_literal = self._action("Run SQL...", c.run_prompted_statement, "Ctrl+F5")
        self.action_describe = self._action("Describe Table Under Cursor", c.describe_table_under_cursor, "F6")
        self.action_describe_prompt = self._action("Describe Table...", c.describe_table_named_by_prompt, "Ctrl+F6")
        self.action_format = self._action("Format SQL", self._format_current, "Ctrl+Shift+F")

        # Session
        self.action_database = self._action("Set Database...", c.set_database_by_prompt, "Ctrl+D")
        self.action_reset = self._action("Reset Credentials", c.reset_credentials, "Ctrl+Shift+R")

        # View / Help
        self.action_dark_mode = QAction("Dark Mode", self)
        self.action_dark_mode.setCheckable(True)
        self.action_dark_mode.setChecked(Theme.is_dark())
        self.action_dark_mode.triggered.connect(self._toggle_dark_mode)
        self.action_about = self._action("About", self._show_about)

    def _create_menu_bar(self) -> None:
        menu_bar = self.menuBar()

        file_menu = menu_bar.addMenu("&File")
        for action in (self.action_new, self.action_open, self.action_snippets):
            file_menu.addAction(action)
        file_menu.addSeparator()
        for action in (self.action_save, self.action_save_as, self.action_close_tab):
            file_menu.addAction(action)
        file_menu.addSeparator()
        file_menu.addAction(self.action_settings)
        file_menu.addSeparator()
        file_menu.addAction(self.action_exit)

        query_menu = menu_bar.addMenu("&Query")
        for action in (self.action_run, self.action_run_line, self.action_run_literal):
            query_menu.addAction(action)
        query_menu.addSeparator()
        query_menu.addAction(self.action_describe)
        query_menu.addAction(self.action_describe_prompt)
        query_menu.addSeparator()
        query_menu.addAction(self.action_format)

        session_menu = menu_bar.addMenu("&Session")
        session_menu.addAction(self.action_database)
        session_menu.addAction(self.action_reset)

        view_menu = menu_bar.addMenu("&View")
        view_menu.addAction(self.action_dark_mode)

        help_menu = menu_bar.addMenu("&Help")
        help_menu.addAction(self.action_about)

    def _create_central_widget(self) -> None:
        self.tab_container = TabContainer()
        self.setCentralWidget(self.tab_container)

    def _create_status_bar(self) -> None:
        self.status_bar = QStatusBar()
        self.status_bar.setFixedHeight(22)
        self.setStatusBar(self.status_bar)
        self.lbl_session = QLabel()
        self.status_bar.addPermanentWidget(self.lbl_session)
        self.refresh_session_label()
        self.status_bar.showMessage("Ready")

    def refresh_session_label(self) -> None:
        self.lbl_session.setText(self.session.describe())

    def set_status(self, message: str, timeout: int = 0) -> None:
        self.status_bar.showMessage(message, timeout)
        self.refresh_session_label()

    # Tabs

    def current_tab(self) -> Optional[ScriptTab]:
        return self.tab_container.currentWidget()

    def open_script(self, script: ScriptFile) -> ScriptTab:
        """Show ``script`` in a new tab, or focus the tab already showing its file."""
        if script.path is not None:
            index = self.tab_container.find_script(script.path)
            if index >= 0:
                self.tab_container.setCurrentIndex(index)
                return self.tab_container.widget(index)

        tab = ScriptTab(script)
        tab.run_requested.connect(self.commands.run_selected_or_prompted_statement)
        tab.run_line_requested.connect(self.commands.run_current_line)
        tab.describe_requested.connect(self.commands.describe_table_under_cursor)
        self.theme_changed.connect(tab.update_theme)

        self.tab_container.add_script(tab)
        tab.editor.setFocus()
        _logger.debug("Opened %s", script.path or "scratch script")
        return tab

    def _open_script_dialog(self) -> None:
        path, _ = QFileDialog.getOpenFileName(
            self, "Open Script", "", "SQL scripts (*.sql);;All files (*)")
        if path:
            self.commands.open_named_script(path)

    def _save_current(self, save_as: bool = False) -> None:
        tab = self.current_tab()
        if tab is None:
            return
        if tab.save_as() if save_as else tab.save():
            self.tab_container.refresh_titles()
            self.set_status(f"Saved {tab.file_path}", 3000)

    def _close_current_tab(self) -> None:
        self.tab_container.close_tab(self.tab_container.currentIndex())

    def _format_current(self) -> None:
        tab = self.current_tab()
        if tab:
            tab.format_sql()

    # State

    def _restore_state(self, scripts: list) -> None:
        """Restore geometry and tabs, then open scripts named on the command line."""
        settings = QSettings("SQLScratch", "SQLScratch")
        geometry = settings.value("geometry")
        if geometry:
            self.restoreGeometry(geometry)
        else:
            self.resize(1100, 800)

        try:
            saved = load_open_tabs()
        except sqlite3.Error as e:
            _logger.warning("Could not restore tabs: %s", e)
            saved = []
        for path, text in saved:
            if path is None:
                self.open_script(ScriptFile(text=text))
            elif Path(path).exists():
                self.commands.open_named_script(path)

        for script in scripts:
            self.commands.open_named_script(script)

        if self.tab_container.count() == 0:
            self.open_script(ScriptFile())

    def _save_state(self) -> None:
        settings = QSettings("SQLScratch", "SQLScratch")
        settings.setValue("geometry", self.saveGeometry())
        try:
            set_setting("dark_mode", "1" if Theme.is_dark() else "0")
            save_open_tabs([
                (tab.file_path, "" if tab.file_path else tab.editor.toPlainText())
                for tab in self.tab_container.script_tabs()
            ])
        except sqlite3.Error as e:
            _logger.warning("Could not save tabs: %s", e)

    def closeEvent(self, event: QCloseEvent) -> None:
        unsaved = self.tab_container.unsaved_tabs()
        if unsaved:
            names = ", ".join(tab.title for tab in unsaved)
            result = QMessageBox.warning(
                self, "Unsaved Changes",
                f"You have unsaved changes in: {names}",
                QMessageBox.StandardButton.Save | QMessageBox.StandardButton.Discard
                | QMessageBox.StandardButton.Cancel,
                QMessageBox.StandardButton.Save)
            if result == QMessageBox.StandardButton.Cancel:
                event.ignore()
                return
            if result == QMessageBox.StandardButton.Save:
                if not all([tab.save() for tab in unsaved]):
                    event.ignore()
                    return

        self._save_state()
        event.accept()

    # Settings / theme

    def _toggle_dark_mode(self) -> None:
        Theme.toggle(QApplication.instance())
        self.action_dark_mode.setChecked(Theme.is_dark())
        self.theme_changed.emit()

    def _on_theme_changed(self) -> None:
        self.set_status("Theme changed", 2000)

    def _show_settings(self) -> None:
        from .dialogs.settings_dialog import SettingsDialog
        dialog = SettingsDialog(self.settings, self)
        if dialog.exec():
            self._apply_settings()

    def _apply_settings(self) -> None:
        """Reload configuration; the session keeps its current database."""
        self.settings = load_settings(get_setting=get_setting)
        self.session.interpreter_path = self.settings.interpreter_path
        self.session.setup_commands = self.settings.setup_commands
        self.commands.snippets_path = self.settings.snippets_path

        size = int(get_setting("font_size", "12"))
        for tab in self.tab_container.script_tabs():
            tab.set_font_size(size)
        self.set_status("Settings saved", 3000)

    def _show_about(self) -> None:
        from ..version import __version__
        QMessageBox.about(
            self,
            "About SQLScratch",
            f"<h3>SQLScratch</h3>"
            f"<p>Version {__version__}</p>"
            f"<p>Scratch SQL editor for SQL*Plus.</p>"
            f"<p>Interpreter: {self.session.interpreter_path}</p>"
        )
