"""SQLScratch - run SQL from a scratch editor through SQL*Plus."""

from .version import __version__

__all__ = ["__version__"]
