"""
Script tab for SQLScratch.

A SQL editor above a read-only result pane that shows interpreter output
and shrinks to fit it.
"""

import logging
from pathlib import Path
from typing import Optional
from PyQt6.QtCore import Qt, pyqtSignal, QSize
from PyQt6.QtGui import (
    QFont,
    QKeySequence,
    QShortcut,
    QColor,
    QIcon,
    QPainter,
    QPixmap,
    QPen,
    QPainterPath,
)
from PyQt6.QtWidgets import (
    QWidget,
    QVBoxLayout,
    QSplitter,
    QToolBar,
    QToolButton,
    QPlainTextEdit,
    QLabel,
    QMenu,
    QMessageBox,
    QFileDialog,
)

from ..syntax import SQLHighlighter
from ...database import get_setting
from ...presenter import MAX_RESULT_LINES, count_lines, fit_height
from ...scripts import ScriptFile, write_script

_logger = logging.getLogger(__name__)

# Result pane height before any output has been shown
DEFAULT_RESULT_LINES = 20


def _make_icon(shape: str, color: str = "#ddd", size: int = 18) -> QIcon:
    """Create a simple painted icon."""
    pixmap = QPixmap(size, size)
    pixmap.fill(QColor(0, 0, 0, 0))
    p = QPainter(pixmap)
    p.setRenderHint(QPainter.RenderHint.Antialiasing)
    c = QColor(color)
    m = size

    if shape == "play":
        p.setBrush(c)
        p.setPen(Qt.PenStyle.NoPen)
        path = QPainterPath()
        path.moveTo(m * 0.2, m * 0.1)
        path.lineTo(m * 0.85, m * 0.5)
        path.lineTo(m * 0.2, m * 0.9)
        path.closeSubpath()
        p.drawPath(path)

    elif shape == "line":
        p.setBrush(c)
        p.setPen(Qt.PenStyle.NoPen)
        path = QPainterPath()
        path.moveTo(m * 0.1, m * 0.25)
        path.lineTo(m * 0.5, m * 0.5)
        path.lineTo(m * 0.1, m * 0.75)
        path.closeSubpath()
        p.drawPath(path)
        p.drawRect(int(m * 0.55), int(m * 0.45), int(m * 0.35), int(m * 0.1))

    elif shape == "describe":
        pen = QPen(c, 1.5)
        p.setPen(pen)
        p.drawRect(int(m * 0.1), int(m * 0.15), int(m * 0.8), int(m * 0.7))
        p.drawLine(int(m * 0.1), int(m * 0.35), int(m * 0.9), int(m * 0.35))
        p.drawLine(int(m * 0.4), int(m * 0.15), int(m * 0.4), int(m * 0.85))

    elif shape == "save":
        pen = QPen(c, 1.5)
        p.setPen(pen)
        p.setBrush(QColor(0, 0, 0, 0))
        p.drawRect(int(m * 0.1), int(m * 0.05), int(m * 0.8), int(m * 0.9))
        p.drawRect(int(m * 0.3), int(m * 0.05), int(m * 0.35), int(m * 0.3))
        p.setPen(Qt.PenStyle.NoPen)
        p.setBrush(c)
        p.drawRect(int(m * 0.25), int(m * 0.55), int(m * 0.5), int(m * 0.3))

    elif shape == "format":
        pen = QPen(c, 1.5)
        p.setPen(pen)
        p.drawLine(int(m * 0.1), int(m * 0.2), int(m * 0.9), int(m * 0.2))
        p.drawLine(int(m * 0.25), int(m * 0.4), int(m * 0.9), int(m * 0.4))
        p.drawLine(int(m * 0.25), int(m * 0.6), int(m * 0.9), int(m * 0.6))
        p.drawLine(int(m * 0.1), int(m * 0.8), int(m * 0.9), int(m * 0.8))

    p.end()
    return QIcon(pixmap)


def _monospace_font(size: int) -> QFont:
    font = QFont("JetBrains Mono", size)
    font.setStyleHint(QFont.StyleHint.Monospace)
    return font


class ScriptEditor(QPlainTextEdit):
    """SQL script editor with syntax highlighting."""

    def __init__(self, parent: Optional[QWidget] = None):
        super().__init__(parent)

        self.setFont(_monospace_font(int(get_setting("font_size", "12"))))
        self.highlighter = SQLHighlighter(self.document())

        self.setTabStopDistance(40)
        self.setLineWrapMode(QPlainTextEdit.LineWrapMode.NoWrap)

        self.setContextMenuPolicy(Qt.ContextMenuPolicy.CustomContextMenu)
        self.customContextMenuRequested.connect(self._show_context_menu)

        shortcut_redo = QShortcut(QKeySequence("Ctrl+Shift+Z"), self)
        shortcut_redo.activated.connect(self.redo)

    def _show_context_menu(self, pos) -> None:
        menu = QMenu(self)

        undo_action = menu.addAction("Undo", self.undo, QKeySequence("Ctrl+Z"))
        undo_action.setEnabled(self.document().isUndoAvailable())
        redo_action = menu.addAction("Redo", self.redo, QKeySequence("Ctrl+Y"))
        redo_action.setEnabled(self.document().isRedoAvailable())
        menu.addSeparator()
        menu.addAction("Cut", self.cut, QKeySequence("Ctrl+X"))
        menu.addAction("Copy", self.copy, QKeySequence("Ctrl+C"))
        menu.addAction("Paste", self.paste, QKeySequence("Ctrl+V"))
        menu.addSeparator()
        menu.addAction("Select All", self.selectAll, QKeySequence("Ctrl+A"))

        menu.exec(self.mapToGlobal(pos))

    def selected_text(self) -> str:
        # Qt uses U+2029 as the paragraph separator in selections
        return self.textCursor().selectedText().replace("\u2029", "\n")

    def set_font_size(self, size: int) -> None:
        font = self.font()
        font.setPointSize(size)
        self.setFont(font)


class ResultPane(QPlainTextEdit):
    """Read-only display of interpreter output. Never saved."""

    def __init__(self, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.setReadOnly(True)
        self.setLineWrapMode(QPlainTextEdit.LineWrapMode.NoWrap)
        self.setFont(_monospace_font(int(get_setting("font_size", "12"))))
        self.setUndoRedoEnabled(False)

    def line_height(self) -> int:
        return self.fontMetrics().lineSpacing()

    def visible_lines(self) -> int:
        """Lines that fit in the current viewport, or the default area."""
        lines = self.viewport().height() // max(self.line_height(), 1)
        return lines if lines > 0 else DEFAULT_RESULT_LINES

    def height_for_lines(self, lines: int) -> int:
        margins = 2 * (self.frameWidth() + int(self.document().documentMargin()))
        return lines * self.line_height() + margins

    def set_font_size(self, size: int) -> None:
        font = self.font()
        font.setPointSize(size)
        self.setFont(font)


class ScriptTab(QWidget):
    """Tab with a script editor and its result pane."""

    run_requested = pyqtSignal()
    run_line_requested = pyqtSignal()
    describe_requested = pyqtSignal()

    def __init__(self, script: Optional[ScriptFile] = None, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.script = script or ScriptFile()

        self._setup_ui()
        self.editor.setPlainText(self.script.text)
        self.editor.document().setModified(False)

    @property
    def file_path(self) -> Optional[Path]:
        return self.script.path

    @property
    def title(self) -> str:
        return self.file_path.name if self.file_path else "Scratch"

    def _setup_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)

        self.editor = ScriptEditor()

        self._create_toolbar()
        layout.addWidget(self.toolbar)

        self.splitter = QSplitter(Qt.Orientation.Vertical)
        self.splitter.setHandleWidth(3)
        self.splitter.addWidget(self.editor)

        results = QWidget()
        results_layout = QVBoxLayout(results)
        results_layout.setContentsMargins(0, 0, 0, 0)
        results_layout.setSpacing(0)
        self.lbl_result = QLabel("")
        self.lbl_result.setProperty("subheading", True)
        results_layout.addWidget(self.lbl_result)
        self.result_view = ResultPane()
        results_layout.addWidget(self.result_view)
        self.splitter.addWidget(results)

        self.splitter.setSizes([500, 300])
        layout.addWidget(self.splitter)

    def _create_toolbar(self) -> None:
        self.toolbar = QToolBar()
        self.toolbar.setMovable(False)
        self.toolbar.setIconSize(QSize(20, 20))

        def _tb(text, icon_name, tooltip, slot, icon_color="#ddd"):
            btn = QToolButton()
            btn.setText(text)
            btn.setIcon(_make_icon(icon_name, icon_color, size=20))
            btn.setToolButtonStyle(Qt.ToolButtonStyle.ToolButtonTextUnderIcon)
            btn.setAutoRaise(True)
            btn.setToolTip(tooltip)
            btn.clicked.connect(slot)
            self.toolbar.addWidget(btn)
            return btn

        self.btn_run = _tb("Run", "play", "Run selection or statement at cursor (F5)",
                           self.run_requested.emit, "#fff")
        self.btn_run_line = _tb("Line", "line", "Run current line (Shift+F5)",
                                self.run_line_requested.emit)
        self.btn_describe = _tb("Describe", "describe", "Describe table under cursor (F6)",
                                self.describe_requested.emit)
        self.toolbar.addSeparator()
        self.btn_save = _tb("Save", "save", "Save script (Ctrl+S)", self.save)
        self.btn_format = _tb("Format", "format", "Format SQL (Ctrl+Shift+F)", self.format_sql)

    # Results

    def show_result(self, text: str, title: str) -> None:
        """Show output and shrink the result pane to fit it."""
        self.lbl_result.setText(f"  {title}")
        self.result_view.setPlainText(text)
        self._fit_result(count_lines(text))

    def _fit_result(self, line_count: int) -> None:
        current = self.result_view.visible_lines()
        lines = fit_height(line_count, current, MAX_RESULT_LINES)
        if lines == current and self.result_view.viewport().height() > 0:
            return
        pane = self.result_view.height_for_lines(lines) + self.lbl_result.sizeHint().height()
        total = sum(self.splitter.sizes()) or self.height()
        self.splitter.setSizes([max(total - pane, 0), pane])

    # Files

    def has_unsaved_changes(self) -> bool:
        """Scratch tabs are never considered unsaved; files are."""
        return self.file_path is not None and self.editor.document().isModified()

    def save(self) -> bool:
        if self.file_path is None:
            return self.save_as()
        self.script.text = self.editor.toPlainText()
        try:
            write_script(self.script)
        except OSError as e:
            _logger.error("Could not save %s: %s", self.file_path, e)
            QMessageBox.warning(self, "Save Error", f"Could not save {self.file_path}:\n{e}")
            return False
        self.editor.document().setModified(False)
        return True

    def save_as(self) -> bool:
        path, _ = QFileDialog.getSaveFileName(
            self, "Save Script", str(self.file_path or ""), "SQL scripts (*.sql);;All files (*)")
        if not path:
            return False
        previous = self.script.path
        self.script.path = Path(path)
        if not self.save():
            self.script.path = previous
            return False
        return True

    def format_sql(self) -> None:
        """Reformat the script with sqlparse."""
        try:
            import sqlparse
        except ImportError:
            QMessageBox.warning(self, "Format Error", "sqlparse module not available")
            return
        formatted = sqlparse.format(self.editor.toPlainText(), reindent=True, keyword_case="upper")
        self.editor.setPlainText(formatted)

    def set_font_size(self, size: int) -> None:
        self.editor.set_font_size(size)
        self.result_view.set_font_size(size)

    def update_theme(self) -> None:
        self.editor.highlighter.update_theme()
