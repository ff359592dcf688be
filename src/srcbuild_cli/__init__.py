"""Command line interface for srcbuild."""

from srcbuild import __version__

__all__ = ["__version__"]
