"""Environment-driven runtime configuration for srcbuild."""

from __future__ import annotations

import os
from typing import Optional

from srcbuild_common.constants import RUNTIME_MODES, EnvVars

_VALID_LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigManager:
    """Read srcbuild settings from environment variables.

    A process-wide singleton; pass ``stub=True`` for an independent instance.
    Values are read on every call so changes to ``os.environ`` are honored.
    """

    SRCBUILD_RUNTIME = EnvVars.RUNTIME
    SRCBUILD_LOG_LEVEL = EnvVars.LOG_LEVEL
    SRCBUILD_LOG_FILE = EnvVars.LOG_FILE
    SRCBUILD_ENGINE = EnvVars.ENGINE

    _instance: Optional["ConfigManager"] = None

    def __new__(cls, stub: bool = False) -> "ConfigManager":
        if stub:
            return super().__new__(cls)
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Drop the singleton instance (used by tests)."""
        cls._instance = None

    def _read(self, name: str) -> str | None:
        value = os.environ.get(name)
        if value is None:
            return None
        value = value.strip()
        return value or None

    def get_log_level(self, default: str = "WARNING") -> str:
        """Return the configured log level, upper-cased.

        Unknown level names fall back to ``default``.
        """
        value = self._read(self.SRCBUILD_LOG_LEVEL)
        if value is None:
            return default
        level = value.upper()
        return level if level in _VALID_LOG_LEVELS else default

    def get_log_file(self) -> str | None:
        """Return the log file path, or None when file logging is off."""
        return self._read(self.SRCBUILD_LOG_FILE)

    def get_runtime_mode(self) -> str | None:
        """Return the forced runtime mode, or None when not set or invalid."""
        value = self._read(self.SRCBUILD_RUNTIME)
        if value is None:
            return None
        mode = value.lower()
        return mode if mode in RUNTIME_MODES else None

    def get_engine(self) -> str | None:
        """Return the engine module specifier override, if any."""
        return self._read(self.SRCBUILD_ENGINE)


config = ConfigManager()
