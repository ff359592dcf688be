"""Module loading with an explicit at-most-once cache.

A loader resolves a specifier either to one of its registered built-in
modules or to a ``.py`` file, evaluates the file in a fresh module namespace
and caches the result by resolved path. Each loader owns its cache, so two
loaders never share evaluated modules.
"""

from __future__ import annotations

import hashlib
import importlib.util
import re
import sys
import traceback
from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager
from enum import Enum
from types import ModuleType
from typing import Any

from srcbuild.errors import ModuleLoadError, SrcbuildError
from srcbuild.fs import Filesystem
from srcbuild.paths import PathUtil
from srcbuild_common.constants import MODULE_SUFFIX
from srcbuild_logging import get_cli_logger

logger = get_cli_logger(__name__)

_MODULE_NAME_RE = re.compile(r"\W")


class _Builtin(Enum):
    BUILTIN = "builtin"


BUILTIN = _Builtin.BUILTIN
"""Sentinel returned by ``ModuleLoader.resolve`` for built-in module names."""


class ModuleCache:
    """Map of resolved module paths to their evaluated modules."""

    def __init__(self) -> None:
        self._entries: dict[str, Any] = {}

    def __contains__(self, path: str) -> bool:
        return path in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, path: str) -> Any | None:
        return self._entries.get(path)

    def store(self, path: str, exports: Any) -> None:
        """Record the exports for ``path``; a path is only ever stored once."""
        if path in self._entries:
            msg = f"Module already cached: {path}"
            raise SrcbuildError(msg)
        self._entries[path] = exports

    def paths(self) -> list[str]:
        return list(self._entries)


class ModuleLoader(ABC):
    """Resolve, evaluate, and cache modules.

    Parameters
    ----------
    fs : Filesystem
        Filesystem adapter used to read module sources
    paths : PathUtil
        Path utility used to resolve specifiers
    builtins : dict[str, Any] | None, optional
        Built-in module exports keyed by name
    cache : ModuleCache | None, optional
        Cache to use; a new one is created when omitted
    """

    def __init__(
        self,
        fs: Filesystem,
        paths: PathUtil,
        builtins: dict[str, Any] | None = None,
        cache: ModuleCache | None = None,
    ) -> None:
        self.fs = fs
        self.paths = paths
        self.cache = cache if cache is not None else ModuleCache()
        self._builtins: dict[str, Any] = dict(builtins or {})

    def register_builtin(self, name: str, exports: Any) -> None:
        """Register ``exports`` under the built-in module ``name``."""
        self._builtins[name] = exports

    def is_builtin(self, specifier: str) -> bool:
        return specifier in self._builtins

    def resolve(self, specifier: str, requesting_dir: str) -> str | _Builtin:
        """Resolve a specifier to an absolute module path or ``BUILTIN``.

        Parameters
        ----------
        specifier : str
            Built-in name, or relative/absolute module path
        requesting_dir : str
            Directory relative specifiers are resolved against

        Returns
        -------
        str | _Builtin
            Normalized absolute path, or ``BUILTIN``
        """
        if self.is_builtin(specifier):
            return BUILTIN
        if not specifier.endswith(MODULE_SUFFIX):
            specifier += MODULE_SUFFIX
        if specifier.startswith("."):
            return self.paths.resolve(requesting_dir, specifier)
        return self.paths.resolve(specifier)

    def load(self, specifier: str, requesting_dir: str) -> Any:
        """Load a module, evaluating it at most once per resolved path.

        Raises
        ------
        ModuleLoadError
            If the module cannot be read or raises while evaluating
        """
        resolved = self.resolve(specifier, requesting_dir)
        if resolved is BUILTIN:
            return self._builtins[specifier]

        if resolved in self.cache:
            logger.debug("Module cache hit: %s", resolved)
            return self.cache.get(resolved)

        logger.debug("Loading module %s from %s", specifier, resolved)
        try:
            exports = self._evaluate(resolved, self._module_name(resolved))
        except ModuleLoadError:
            raise
        except Exception as e:
            raise ModuleLoadError(resolved, str(e), traceback.format_exc()) from e

        self.cache.store(resolved, exports)
        return exports

    def module_path(self, exports: Any) -> str:
        """Return the absolute source path of a loaded or built-in module."""
        location = getattr(exports, "__file__", None)
        if not location:
            msg = f"Module has no source location: {exports!r}"
            raise SrcbuildError(msg)
        return self.paths.resolve(location)

    def _module_name(self, path: str) -> str:
        stem = self.paths.basename(path)[: -len(MODULE_SUFFIX)]
        digest = hashlib.sha1(path.encode("utf-8")).hexdigest()[:12]
        return f"_srcbuild_loaded_{_MODULE_NAME_RE.sub('_', stem)}_{digest}"

    @contextmanager
    def _registered(self, module: ModuleType) -> Iterator[None]:
        """Expose ``module`` in ``sys.modules`` while it runs; drop it on failure.

        Class machinery such as ``dataclasses`` looks the defining module up
        by name during evaluation.
        """
        sys.modules[module.__name__] = module
        try:
            yield
        except BaseException:
            sys.modules.pop(module.__name__, None)
            raise

    @abstractmethod
    def _evaluate(self, path: str, module_name: str) -> ModuleType:
        """Evaluate the module at ``path`` in a fresh namespace."""


class NativeModuleLoader(ModuleLoader):
    """Loader that evaluates files through ``importlib``.

    Loaded modules are registered in ``sys.modules`` under a name derived
    from their resolved path.
    """

    def _evaluate(self, path: str, module_name: str) -> ModuleType:
        spec = importlib.util.spec_from_file_location(module_name, path)
        if spec is None or spec.loader is None:
            msg = f"Could not load spec for {path}"
            raise ImportError(msg)
        module = importlib.util.module_from_spec(spec)
        with self._registered(module):
            spec.loader.exec_module(module)
        return module


class EmulatedModuleLoader(ModuleLoader):
    """Loader that reads sources through the filesystem adapter and compiles them.

    The module object is the exports container: its namespace starts empty
    apart from ``__name__``/``__file__`` and the ``module`` handle that refers
    to it.
    """

    def _evaluate(self, path: str, module_name: str) -> ModuleType:
        source = self.fs.read_file(path)
        module = ModuleType(module_name)
        module.__file__ = path
        module.__dict__["module"] = module
        code = compile(source, path, "exec")
        with self._registered(module):
            exec(code, module.__dict__)  # noqa: S102
        return module
