"""Logger configuration profiles for srcbuild.

Console output always goes to stderr; stdout is reserved for the dependency
report consumed by calling build systems.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from srcbuild_common.config import config
from srcbuild_common.io.files import ensure_dir

from .formatters import CONSOLE_FORMAT, DEFAULT_FORMAT, SafeFormatter

PROFILES = ("cli", "test")

TRACE = 5
logging.addLevelName(TRACE, "TRACE")


def get_log_level() -> str:
    """Return the log level from the environment."""
    return config.get_log_level()


def _resolve_level(level: str | int | None) -> int:
    if level is None:
        level = get_log_level()
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    return resolved if isinstance(resolved, int) else logging.WARNING


def configure_logger(
    name: str,
    *,
    profile: str = "cli",
    level: str | int | None = None,
    log_file: str | None = None,
    to_console: bool = True,
) -> logging.Logger:
    """Configure a named logger with one of the known profiles.

    Parameters
    ----------
    name : str
        Logger name, usually a top-level package
    profile : str
        ``cli`` writes to stderr and optionally a file; ``test`` only
        propagates so pytest's caplog sees the records
    level : str | int | None, optional
        Log level, defaults to ``SRCBUILD_LOG_LEVEL``
    log_file : str | None, optional
        File to append records to
    to_console : bool
        Whether the ``cli`` profile adds a stderr handler

    Returns
    -------
    logging.Logger
        The configured logger

    Raises
    ------
    ValueError
        If ``profile`` is unknown
    """
    if profile not in PROFILES:
        msg = f"Unknown profile: {profile}"
        raise ValueError(msg)

    logger = logging.getLogger(name)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(_resolve_level(level))

    if profile == "test":
        logger.propagate = True
        return logger

    logger.propagate = False
    if to_console:
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(SafeFormatter(CONSOLE_FORMAT))
        logger.addHandler(console)

    if log_file:
        path = Path(log_file).expanduser()
        ensure_dir(path.parent)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setFormatter(SafeFormatter(DEFAULT_FORMAT))
        logger.addHandler(file_handler)

    return logger


def get_cli_logger(name: str) -> logging.Logger:
    """Get a module logger for CLI-side code."""
    return logging.getLogger(name)


def get_test_logger(name: str) -> logging.Logger:
    """Get a logger configured with the test profile."""
    return configure_logger(name, profile="test", level="DEBUG")
