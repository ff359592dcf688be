"""Project/user YAML configuration loading for srcbuild.

Locates, loads, and deep-merges configuration from the user file
(~/.config/srcbuild/config.yaml) and the project file (.srcbuild.yaml in the
working directory) on top of the built-in defaults.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from srcbuild_common.constants import (
    DEBUGGER_SUBTREE,
    DEFAULT_PLUGINS,
    PROJECT_CONFIG_FILENAME,
)
from srcbuild_common.io import safe_read_yaml
from srcbuild_common.io.files import FileOperationError
from srcbuild_common.path import get_user_config_path


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep-merge two dictionaries in place and return ``base``.

    Values from ``override`` take precedence. Nested dicts are merged
    recursively; other values (lists included) are replaced.
    """
    for key, value in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            deep_merge(base[key], value)
        else:
            base[key] = value
    return base


def default_config() -> dict[str, Any]:
    """Return the default build configuration structure."""
    return {
        "runtime": "auto",
        "engine": "engine",
        "default_plugins": list(DEFAULT_PLUGINS),
        "overrides": [
            {"pattern": DEBUGGER_SUBTREE, "provider": "debugger"},
        ],
        "log_level": "WARNING",
    }


def load_yaml(path: Path) -> dict[str, Any]:
    """Load a YAML mapping, returning an empty dict when missing or unusable."""
    try:
        if not path.exists():
            return {}
        data = safe_read_yaml(path) or {}
        return data if isinstance(data, dict) else {}
    except FileOperationError:
        return {}


def get_project_config_path(project_root: Path) -> Path:
    """Get path to project-level configuration file."""
    return project_root / PROJECT_CONFIG_FILENAME


def load_merged_config(project_root: Path | None = None) -> dict[str, Any]:
    """Load default + user + project YAML config into a single dict.

    Parameters
    ----------
    project_root : Path | None, optional
        Directory holding ``.srcbuild.yaml``; defaults to the working directory

    Returns
    -------
    dict[str, Any]
        Merged configuration
    """
    cfg = default_config()

    user_cfg = load_yaml(get_user_config_path())
    if user_cfg:
        deep_merge(cfg, user_cfg)

    root = project_root if project_root is not None else Path.cwd()
    project_cfg = load_yaml(get_project_config_path(root))
    if project_cfg:
        deep_merge(cfg, project_cfg)

    return cfg
