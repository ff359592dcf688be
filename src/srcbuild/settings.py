"""Typed build settings assembled from YAML config and the environment."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from srcbuild.errors import ConfigError
from srcbuild_common.config import config, load_merged_config
from srcbuild_common.constants import RUNTIME_MODES


@dataclass(frozen=True)
class OverrideSpec:
    """A path substring and the module specifier supplying its plugin list."""

    pattern: str
    provider: str


@dataclass(frozen=True)
class BuildSettings:
    """Settings for one build invocation."""

    runtime: str = "auto"
    engine: str = "engine"
    default_plugins: tuple[str, ...] = ()
    overrides: tuple[OverrideSpec, ...] = ()
    log_level: str = "WARNING"
    log_file: str | None = None
    base_dir: str = field(default_factory=lambda: str(Path.cwd()))


def _string_list(value: Any, key: str) -> tuple[str, ...]:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        msg = f"Config key '{key}' must be a list of strings"
        raise ConfigError(msg)
    return tuple(value)


def _overrides(value: Any) -> tuple[OverrideSpec, ...]:
    if value is None:
        return ()
    if not isinstance(value, list):
        msg = "Config key 'overrides' must be a list"
        raise ConfigError(msg)
    specs = []
    for entry in value:
        if (
            not isinstance(entry, dict)
            or not isinstance(entry.get("pattern"), str)
            or not isinstance(entry.get("provider"), str)
        ):
            msg = f"Invalid override entry: {entry!r}"
            raise ConfigError(msg)
        specs.append(OverrideSpec(entry["pattern"], entry["provider"]))
    return tuple(specs)


def settings_from_mapping(data: dict[str, Any], base_dir: str) -> BuildSettings:
    """Validate a merged config mapping and apply environment overrides.

    Raises
    ------
    ConfigError
        If a value has the wrong type or names an unknown runtime
    """
    runtime = config.get_runtime_mode() or data.get("runtime", "auto")
    if runtime not in RUNTIME_MODES:
        msg = f"Unknown runtime '{runtime}', expected one of {', '.join(RUNTIME_MODES)}"
        raise ConfigError(msg)

    engine = config.get_engine() or data.get("engine", "engine")
    if not isinstance(engine, str) or not engine:
        msg = "Config key 'engine' must be a non-empty string"
        raise ConfigError(msg)

    log_level = data.get("log_level", "WARNING")
    if not isinstance(log_level, str):
        msg = "Config key 'log_level' must be a string"
        raise ConfigError(msg)

    return BuildSettings(
        runtime=runtime,
        engine=engine,
        default_plugins=_string_list(data.get("default_plugins", []), "default_plugins"),
        overrides=_overrides(data.get("overrides")),
        log_level=config.get_log_level(default=log_level.upper()),
        log_file=config.get_log_file() or data.get("log_file"),
        base_dir=base_dir,
    )


def load_settings(project_root: Path | None = None) -> BuildSettings:
    """Load settings for a build run from ``project_root`` (default: cwd)."""
    root = project_root if project_root is not None else Path.cwd()
    return settings_from_mapping(load_merged_config(root), str(root))
