"""Tresor command-line tools."""

from tresor import __version__

__all__ = ["__version__"]
