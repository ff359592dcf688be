"""Runtime capability providers.

A provider bundles the filesystem adapter, path utility, and module loader the
build runs on. :func:`detect_runtime` picks one at startup: the native
provider when the host offers a file-based module loading primitive, the
emulated provider otherwise. Nothing global is patched; callers pass the
provider along.
"""

from __future__ import annotations

import importlib
import sys
from collections.abc import Callable, Sequence

from srcbuild import debugger, engine
from srcbuild.fs import EmulatedFilesystem, Filesystem, NativeFilesystem
from srcbuild.loader import (
    EmulatedModuleLoader,
    ModuleCache,
    ModuleLoader,
    NativeModuleLoader,
)
from srcbuild.paths import NativePaths, PathUtil, StringPaths
from srcbuild_common.constants import RUNTIME_MODES
from srcbuild_logging import get_cli_logger

logger = get_cli_logger(__name__)

EMULATED_EXECUTABLE = "srcbuild-embedded"


def has_native_loader() -> bool:
    """Return True if ``importlib.util.spec_from_file_location`` is available."""
    try:
        util = importlib.import_module("importlib.util")
    except ImportError:
        return False
    return callable(getattr(util, "spec_from_file_location", None))


class RuntimeProvider:
    """Capabilities the build logic runs on.

    Parameters
    ----------
    name : str
        ``native`` or ``emulated``
    fs : Filesystem
        Filesystem adapter
    paths : PathUtil
        Path utility
    loader : ModuleLoader
        Module loader; ``fs`` and ``paths`` are registered as built-ins
    executable : str
        First entry of synthesized invocation arguments
    """

    def __init__(
        self,
        name: str,
        fs: Filesystem,
        paths: PathUtil,
        loader: ModuleLoader,
        executable: str,
    ) -> None:
        self.name = name
        self.fs = fs
        self.paths = paths
        self.loader = loader
        self.executable = executable
        for builtin, exports in self._builtin_modules().items():
            loader.register_builtin(builtin, exports)

    def _builtin_modules(self) -> dict[str, object]:
        return {
            "fs": self.fs,
            "path": self.paths,
            "engine": engine,
            "debugger": debugger,
        }

    def invocation_arguments(self, script_args: Sequence[str]) -> list[str]:
        """Build ``[executable, script, *args]`` from the host argument vector.

        Parameters
        ----------
        script_args : Sequence[str]
            Host arguments starting with the script path
        """
        return [self.executable, *script_args]

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"


class NativeRuntime(RuntimeProvider):
    """Provider using the standard library directly."""

    def __init__(self, cache: ModuleCache | None = None) -> None:
        fs = NativeFilesystem()
        paths = NativePaths()
        super().__init__(
            "native",
            fs,
            paths,
            NativeModuleLoader(fs, paths, cache=cache),
            sys.executable or "python",
        )


class EmulatedRuntime(RuntimeProvider):
    """Provider built from low-level ``os`` primitives and string paths."""

    def __init__(
        self,
        cache: ModuleCache | None = None,
        cwd: Callable[[], str] | None = None,
    ) -> None:
        fs = EmulatedFilesystem()
        paths = StringPaths(cwd)
        super().__init__(
            "emulated",
            fs,
            paths,
            EmulatedModuleLoader(fs, paths, cache=cache),
            EMULATED_EXECUTABLE,
        )


def detect_runtime(
    mode: str = "auto",
    probe: Callable[[], bool] = has_native_loader,
) -> RuntimeProvider:
    """Select the runtime provider.

    Parameters
    ----------
    mode : str
        ``auto`` probes the host; ``native`` or ``emulated`` force a provider
    probe : Callable[[], bool]
        Capability check used in ``auto`` mode

    Returns
    -------
    RuntimeProvider
        A fresh provider with its own module cache

    Raises
    ------
    ValueError
        If ``mode`` is not a known runtime mode
    """
    if mode not in RUNTIME_MODES:
        msg = f"Unknown runtime mode: {mode}"
        raise ValueError(msg)

    if mode == "auto":
        mode = "native" if probe() else "emulated"
        logger.debug("Detected %s runtime", mode)

    if mode == "native":
        return NativeRuntime()
    return EmulatedRuntime()
