"""Well-known locations used by srcbuild."""

from __future__ import annotations

from pathlib import Path

from srcbuild_common.constants import USER_CONFIG_FILENAME, USER_CONFIG_SUBDIR


def get_user_config_path() -> Path:
    """Get path to user-level configuration file (~/.config/srcbuild/config.yaml).

    Returns
    -------
    Path
        The user configuration file path
    """
    return Path.home() / ".config" / USER_CONFIG_SUBDIR / USER_CONFIG_FILENAME
