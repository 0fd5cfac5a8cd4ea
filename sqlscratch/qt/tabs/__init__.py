"""
Tab widgets for SQLScratch PyQt6 GUI.
"""

from .script_tab import ScriptTab

__all__ = ["ScriptTab"]
