"""Per-file transform step."""

from __future__ import annotations

import traceback
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Protocol

from srcbuild.errors import TransformError
from srcbuild.fs import Filesystem
from srcbuild_logging import get_cli_logger

logger = get_cli_logger(__name__)


class TransformEngine(Protocol):
    """Black-box engine rewriting source text with a plugin list."""

    def transform(self, text: str, plugins: Sequence[str]) -> Any: ...


class PluginProvider(Protocol):
    """Computes the plugin list for a specific path."""

    def plugins_for(self, path: str) -> Sequence[str]: ...


@dataclass(frozen=True)
class PluginOverride:
    """Use ``provider`` for every path containing ``pattern``."""

    pattern: str
    provider: PluginProvider


class TransformPipeline:
    """Read a source file, pick its plugins, and run the engine.

    Parameters
    ----------
    fs : Filesystem
        Adapter used to read sources
    engine : TransformEngine
        Transformation engine
    default_plugins : Sequence[str]
        Plugin list for paths no override matches
    overrides : Sequence[PluginOverride]
        Checked in order; the first matching pattern wins
    """

    def __init__(
        self,
        fs: Filesystem,
        engine: TransformEngine,
        default_plugins: Sequence[str],
        overrides: Sequence[PluginOverride] = (),
    ) -> None:
        self.fs = fs
        self.engine = engine
        self.default_plugins = list(default_plugins)
        self.overrides = list(overrides)

    def plugins_for(self, path: str) -> list[str]:
        normalized = path.replace("\\", "/")
        for override in self.overrides:
            if override.pattern in normalized:
                return list(override.provider.plugins_for(path))
        return list(self.default_plugins)

    def transform(self, path: str) -> str:
        """Return the transformed text of ``path``.

        Raises
        ------
        ReadError
            If the source cannot be read
        TransformError
            If the engine rejects the source
        """
        plugins = self.plugins_for(path)
        text = self.fs.read_file(path)
        logger.debug("Transforming %s with plugins %s", path, plugins)

        try:
            result = self.engine.transform(text, plugins)
        except Exception as e:
            stack = "".join(traceback.format_exception(type(e), e, e.__traceback__))
            raise TransformError(path, stack.rstrip()) from e

        return result.code
