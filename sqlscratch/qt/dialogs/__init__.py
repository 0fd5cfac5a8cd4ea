"""
Dialog windows for SQLScratch PyQt6 GUI.
"""

from .settings_dialog import SettingsDialog

__all__ = ["SettingsDialog"]
