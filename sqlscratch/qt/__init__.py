"""
SQLScratch PyQt6 GUI Module

Scratch SQL editor that runs statements through SQL*Plus.
"""

from .main_window import MainWindow

__all__ = ["MainWindow"]
