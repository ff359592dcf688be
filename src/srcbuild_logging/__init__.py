"""Logging setup shared by srcbuild packages."""

from .config import configure_logger, get_cli_logger, get_test_logger
from .formatters import SafeFormatter

__all__ = [
    "SafeFormatter",
    "configure_logger",
    "get_cli_logger",
    "get_test_logger",
]
