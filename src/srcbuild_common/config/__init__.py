"""Shared configuration utilities for srcbuild (srcbuild_common.config).

This package provides:
- runtime: Environment-driven configuration (``config`` singleton)
- project: YAML-based project/user configuration loader
"""

from .project import load_merged_config
from .runtime import ConfigManager, config

__all__ = [
    "ConfigManager",
    "config",
    "load_merged_config",
]
