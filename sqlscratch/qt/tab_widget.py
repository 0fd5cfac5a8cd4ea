"""
Tab container for script tabs.

Owns tab labels (file name, a numbered "Scratch" for unnamed scripts,
a parent folder hint when two open files share a name, and a "*" for
unsaved edits) and the lookup of an already open file.
"""

from pathlib import Path
from typing import Iterator, List, Optional
from PyQt6.QtCore import Qt, QPoint
from PyQt6.QtGui import QMouseEvent
from PyQt6.QtWidgets import (
    QApplication,
    QTabWidget,
    QTabBar,
    QWidget,
    QMenu,
    QMessageBox,
)

from .tabs.script_tab import ScriptTab


class ScriptTabBar(QTabBar):
    """Movable tab bar; a middle click asks to close the tab under the mouse."""

    def __init__(self, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.setMovable(True)
        self.setTabsClosable(True)
        self.setExpanding(False)
        self.setElideMode(Qt.TextElideMode.ElideMiddle)
        self.setDocumentMode(True)

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:
        index = self.tabAt(event.pos())
        if event.button() == Qt.MouseButton.MiddleButton and index >= 0:
            self.tabCloseRequested.emit(index)
        else:
            super().mouseReleaseEvent(event)


class TabContainer(QTabWidget):
    """The open scripts of the main window."""

    def __init__(self, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.setTabBar(ScriptTabBar(self))
        self.setDocumentMode(True)
        self._scratch_numbers = 0

        self.tabCloseRequested.connect(self.close_tab)
        self.tabBar().setContextMenuPolicy(Qt.ContextMenuPolicy.CustomContextMenu)
        self.tabBar().customContextMenuRequested.connect(self._show_context_menu)

    # Lookup

    def script_tabs(self) -> Iterator[ScriptTab]:
        for i in range(self.count()):
            yield self.widget(i)

    def find_script(self, path: Path) -> int:
        """Index of the tab showing ``path``, or -1."""
        for i, tab in enumerate(self.script_tabs()):
            if tab.file_path is not None and tab.file_path.resolve() == path.resolve():
                return i
        return -1

    def unsaved_tabs(self) -> List[ScriptTab]:
        return [tab for tab in self.script_tabs() if tab.has_unsaved_changes()]

    # Labels

    def add_script(self, tab: ScriptTab) -> int:
        if tab.file_path is None:
            self._scratch_numbers += 1
            tab.setProperty("scratch_number", self._scratch_numbers)
        index = self.addTab(tab, "")
        tab.editor.document().modificationChanged.connect(lambda _: self.refresh_titles())
        self.refresh_titles()
        self.setCurrentIndex(index)
        return index

    def _label(self, tab: ScriptTab) -> str:
        if tab.file_path is None:
            return f"Scratch {tab.property('scratch_number')}"
        label = tab.file_path.name
        same_name = [t for t in self.script_tabs()
                     if t.file_path is not None and t.file_path.name == label]
        if len(same_name) > 1:
            label = f"{label} ({tab.file_path.parent.name})"
        if tab.has_unsaved_changes():
            label += " *"
        return label

    def refresh_titles(self) -> None:
        """Relabel every tab; call after a save or save-as."""
        for i, tab in enumerate(self.script_tabs()):
            self.setTabText(i, self._label(tab))
            self.setTabToolTip(i, str(tab.file_path or "Unsaved scratch script"))

    # Closing

    def close_tab(self, index: int) -> bool:
        """Close the tab at ``index``; unsaved files offer save, discard or cancel."""
        tab = self.widget(index)
        if tab is None:
            return False

        if tab.has_unsaved_changes():
            answer = QMessageBox.warning(
                self, "Unsaved Changes", f"Save changes to {tab.file_path}?",
                QMessageBox.StandardButton.Save | QMessageBox.StandardButton.Discard
                | QMessageBox.StandardButton.Cancel,
                QMessageBox.StandardButton.Save)
            if answer == QMessageBox.StandardButton.Cancel:
                return False
            if answer == QMessageBox.StandardButton.Save and not tab.save():
                return False

        self.removeTab(index)
        tab.deleteLater()
        self.refresh_titles()
        return True

    def _close_all_except(self, keep: Optional[ScriptTab]) -> None:
        for tab in list(self.script_tabs()):
            if tab is not keep:
                self.close_tab(self.indexOf(tab))

    def _show_context_menu(self, pos: QPoint) -> None:
        index = self.tabBar().tabAt(pos)
        tab = self.widget(index)
        if tab is None:
            return

        menu = QMenu(self)
        menu.addAction("Close", lambda: self.close_tab(self.indexOf(tab)))
        others = menu.addAction("Close Others", lambda: self._close_all_except(tab))
        others.setEnabled(self.count() > 1)
        menu.addAction("Close All", lambda: self._close_all_except(None))
        if tab.file_path is not None:
            menu.addSeparator()
            menu.addAction("Copy Path",
                           lambda: QApplication.clipboard().setText(str(tab.file_path)))
        menu.exec(self.tabBar().mapToGlobal(pos))
