"""Path utilities over plain string paths.

``NativePaths`` delegates to the standard library. ``StringPaths`` computes
the same results with string operations only, for hosts that lack a path
library; it never touches the filesystem.
"""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from collections.abc import Callable
from pathlib import PurePath

SEP = "/"


class PathUtil(ABC):
    """Interface shared by the native and string path implementations."""

    @abstractmethod
    def join(self, *parts: str) -> str:
        """Join path segments and normalize the result."""

    @abstractmethod
    def dirname(self, path: str) -> str:
        """Return the directory portion of ``path`` (``.`` when there is none)."""

    @abstractmethod
    def basename(self, path: str) -> str:
        """Return the final component of ``path``, ignoring trailing separators."""

    @abstractmethod
    def resolve(self, *segments: str) -> str:
        """Resolve segments right to left into a normalized absolute path."""


class NativePaths(PathUtil):
    """Path utility backed by ``os.path`` and ``pathlib``."""

    def join(self, *parts: str) -> str:
        parts = tuple(p for p in parts if p)
        if not parts:
            return "."
        head, *rest = parts
        rest = [p.lstrip(SEP + os.sep) for p in rest]
        return os.path.normpath(os.path.join(head, *rest))

    def dirname(self, path: str) -> str:
        return str(PurePath(path).parent) if path else "."

    def basename(self, path: str) -> str:
        return PurePath(path).name

    def resolve(self, *segments: str) -> str:
        parts = [s for s in segments if s]
        return os.path.abspath(os.path.join(*parts)) if parts else os.getcwd()


class StringPaths(PathUtil):
    """POSIX path utility built from string operations only.

    Parameters
    ----------
    cwd : Callable[[], str] | None, optional
        Returns the working directory ``resolve`` anchors relative paths to
    """

    def __init__(self, cwd: Callable[[], str] | None = None) -> None:
        self._cwd = cwd or os.getcwd

    def normalize(self, path: str) -> str:
        """Collapse repeated separators and ``.``/``..`` segments."""
        if not path:
            return "."
        absolute = path.startswith(SEP)
        stack: list[str] = []
        for segment in path.split(SEP):
            if segment in ("", "."):
                continue
            if segment == "..":
                if stack and stack[-1] != "..":
                    stack.pop()
                elif not absolute:
                    stack.append(segment)
                continue
            stack.append(segment)
        body = SEP.join(stack)
        if absolute:
            return SEP + body
        return body or "."

    def join(self, *parts: str) -> str:
        return self.normalize(SEP.join(p for p in parts if p))

    def dirname(self, path: str) -> str:
        trimmed = path.rstrip(SEP)
        if not trimmed:
            return SEP if path.startswith(SEP) else "."
        index = trimmed.rfind(SEP)
        if index < 0:
            return "."
        if index == 0:
            return SEP
        return trimmed[:index].rstrip(SEP) or SEP

    def basename(self, path: str) -> str:
        return path.rstrip(SEP).split(SEP)[-1]

    def resolve(self, *segments: str) -> str:
        resolved = ""
        for segment in segments:
            if not segment:
                continue
            if segment.startswith(SEP):
                resolved = segment
            else:
                resolved = f"{resolved}{SEP}{segment}" if resolved else segment
        if not resolved.startswith(SEP):
            resolved = f"{self._cwd()}{SEP}{resolved}"
        return self.normalize(resolved)
