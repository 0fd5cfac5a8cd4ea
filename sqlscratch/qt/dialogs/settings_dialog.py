"""
Settings Dialog for SQLScratch.

Edits the stored interpreter settings and editor font size. Values set
through SQLSCRATCH_* environment variables still take precedence.
"""

from typing import Optional
from PyQt6.QtWidgets import (
    QDialog,
    QVBoxLayout,
    QHBoxLayout,
    QFormLayout,
    QWidget,
    QSpinBox,
    QLineEdit,
    QPlainTextEdit,
    QPushButton,
    QLabel,
    QGroupBox,
    QDialogButtonBox,
    QFileDialog,
)

from ...config import DEFAULT_SETUP_COMMANDS, SETTING_ENV_OVERRIDES, Settings
from ...database import get_setting, set_setting, delete_setting


class SettingsDialog(QDialog):
    """Dialog for application settings."""

    def __init__(self, settings: Settings, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self._settings = settings

        self.setWindowTitle("Settings")
        self.setMinimumWidth(520)
        self.setModal(True)

        self._setup_ui()
        self._load_settings()

    def _setup_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setSpacing(16)

        # Interpreter group
        interpreter_group = QGroupBox("SQL*Plus")
        form = QFormLayout(interpreter_group)
        form.setSpacing(12)

        self.edit_interpreter = QLineEdit()
        form.addRow("Interpreter:", self._with_browse(self.edit_interpreter, self._browse_interpreter))

        self.edit_database = QLineEdit()
        form.addRow("Default database:", self.edit_database)

        self.edit_setup = QPlainTextEdit()
        self.edit_setup.setPlaceholderText(DEFAULT_SETUP_COMMANDS)
        self.edit_setup.setFixedHeight(110)
        form.addRow("Setup commands:", self.edit_setup)

        self.edit_snippets = QLineEdit()
        form.addRow("Snippets file:", self._with_browse(self.edit_snippets, self._browse_snippets))

        note = QLabel("Leave a field empty to use the default. "
                      "Environment overrides win over these values.")
        note.setWordWrap(True)
        note.setProperty("subheading", True)
        form.addRow(note)

        layout.addWidget(interpreter_group)

        # Appearance group
        appearance_group = QGroupBox("Appearance")
        appearance_layout = QFormLayout(appearance_group)
        self.spin_font_size = QSpinBox()
        self.spin_font_size.setRange(8, 24)
        self.spin_font_size.setSuffix(" pt")
        appearance_layout.addRow("Font Size:", self.spin_font_size)
        layout.addWidget(appearance_group)

        layout.addStretch()

        buttons = QDialogButtonBox(
            QDialogButtonBox.StandardButton.Ok |
            QDialogButtonBox.StandardButton.Cancel
        )
        buttons.accepted.connect(self._save_and_close)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)

    def _with_browse(self, line_edit: QLineEdit, slot) -> QWidget:
        row = QWidget()
        row_layout = QHBoxLayout(row)
        row_layout.setContentsMargins(0, 0, 0, 0)
        row_layout.addWidget(line_edit)
        btn = QPushButton("Browse...")
        btn.clicked.connect(slot)
        row_layout.addWidget(btn)
        return row

    def _load_settings(self) -> None:
        self.edit_interpreter.setText(get_setting("interpreter_path", ""))
        self.edit_database.setText(get_setting("default_database", ""))
        self.edit_setup.setPlainText(get_setting("setup_commands", ""))
        self.edit_snippets.setText(get_setting("snippets_path", ""))
        self.spin_font_size.setValue(int(get_setting("font_size", "12")))

        # Show what is in effect where an environment variable overrides
        for key, widget in (("interpreter_path", self.edit_interpreter),
                            ("default_database", self.edit_database),
                            ("snippets_path", self.edit_snippets)):
            widget.setPlaceholderText(str(getattr(self._settings, key)))
            widget.setToolTip(f"Overridden by ${SETTING_ENV_OVERRIDES[key]} when set")

    def _store(self, key: str, value: str) -> None:
        if value:
            set_setting(key, value)
        else:
            delete_setting(key)

    def _save_and_close(self) -> None:
        self._store("interpreter_path", self.edit_interpreter.text().strip())
        self._store("default_database", self.edit_database.text().strip())
        self._store("setup_commands", self.edit_setup.toPlainText().strip())
        self._store("snippets_path", self.edit_snippets.text().strip())
        set_setting("font_size", str(self.spin_font_size.value()))
        self.accept()

    def _browse_interpreter(self) -> None:
        path, _ = QFileDialog.getOpenFileName(self, "SQL*Plus executable")
        if path:
            self.edit_interpreter.setText(path)

    def _browse_snippets(self) -> None:
        path, _ = QFileDialog.getSaveFileName(
            self, "Snippets file", self.edit_snippets.text(), "SQL scripts (*.sql)")
        if path:
            self.edit_snippets.setText(path)
