"""Version information for SQLScratch."""

__version__ = "0.3.0"
