"""Filesystem adapters.

Both adapters expose the same four operations with identical failure
semantics. ``NativeFilesystem`` uses ``pathlib``; ``EmulatedFilesystem`` is
assembled from descriptor-level ``os`` primitives only.
"""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from pathlib import Path

from srcbuild.errors import (
    AlreadyExistsError,
    DirectoryCreateError,
    ReadError,
    WriteError,
)
from srcbuild_logging import get_cli_logger

logger = get_cli_logger(__name__)

ENCODING = "utf-8"
FILE_MODE = 0o666
DIR_MODE = 0o777
READ_CHUNK = 64 * 1024


class Filesystem(ABC):
    """Filesystem operations needed by the build."""

    @abstractmethod
    def read_file(self, path: str) -> str:
        """Return the full text of ``path``.

        Raises
        ------
        ReadError
            If the file cannot be read or decoded
        """

    @abstractmethod
    def write_file(self, path: str, text: str) -> None:
        """Create or truncate ``path`` and write ``text`` to it.

        Raises
        ------
        WriteError
            If the file cannot be opened or written
        """

    @abstractmethod
    def exists(self, path: str) -> bool:
        """Return True if ``path`` resolves to an existing file or directory."""

    @abstractmethod
    def make_directory(self, path: str) -> None:
        """Create exactly one directory level at ``path``.

        Raises
        ------
        AlreadyExistsError
            If ``path`` already exists
        DirectoryCreateError
            If the directory cannot be created for any other reason
        """


class NativeFilesystem(Filesystem):
    """Filesystem adapter backed by ``pathlib``."""

    def read_file(self, path: str) -> str:
        try:
            with Path(path).open(encoding=ENCODING, newline="") as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            msg = f"Failed to read file: {path} ({e})"
            raise ReadError(msg, path) from e

    def write_file(self, path: str, text: str) -> None:
        try:
            with Path(path).open("w", encoding=ENCODING, newline="") as f:
                f.write(text)
        except (OSError, UnicodeEncodeError) as e:
            msg = f"Failed to write to file: {path} ({e})"
            raise WriteError(msg, path) from e

    def exists(self, path: str) -> bool:
        if not path:
            return False
        return Path(path).exists()

    def make_directory(self, path: str) -> None:
        try:
            Path(path).mkdir(mode=DIR_MODE)
        except FileExistsError as e:
            raise AlreadyExistsError(f"Directory exists: {path}", path) from e
        except OSError as e:
            msg = f"Failed to create directory: {path} ({e})"
            raise DirectoryCreateError(msg, path) from e


class EmulatedFilesystem(Filesystem):
    """Filesystem adapter built on ``os.open``/``os.read``/``os.write``/``os.stat``."""

    def read_file(self, path: str) -> str:
        try:
            fd = os.open(path, os.O_RDONLY)
        except OSError as e:
            msg = f"Failed to read file: {path} ({e})"
            raise ReadError(msg, path) from e

        chunks: list[bytes] = []
        try:
            while True:
                chunk = os.read(fd, READ_CHUNK)
                if not chunk:
                    break
                chunks.append(chunk)
        except OSError as e:
            msg = f"Failed to read file: {path} ({e})"
            raise ReadError(msg, path) from e
        finally:
            os.close(fd)

        try:
            return b"".join(chunks).decode(ENCODING)
        except UnicodeDecodeError as e:
            msg = f"Failed to read file: {path} ({e})"
            raise ReadError(msg, path) from e

    def write_file(self, path: str, text: str) -> None:
        try:
            data = text.encode(ENCODING)
        except UnicodeEncodeError as e:
            msg = f"Failed to write to file: {path} ({e})"
            raise WriteError(msg, path) from e

        try:
            fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, FILE_MODE)
        except OSError as e:
            msg = f"Failed to open file for writing: {path} ({e})"
            raise WriteError(msg, path) from e

        try:
            view = memoryview(data)
            while view:
                written = os.write(fd, view)
                view = view[written:]
        except OSError as e:
            msg = f"Failed to write to file: {path} ({e})"
            raise WriteError(msg, path) from e
        finally:
            os.close(fd)

    def exists(self, path: str) -> bool:
        if not path:
            return False
        try:
            os.stat(path)
        except (OSError, ValueError):
            return False
        return True

    def make_directory(self, path: str) -> None:
        if self.exists(path):
            raise AlreadyExistsError(f"Directory exists: {path}", path)
        try:
            os.mkdir(path, DIR_MODE)
        except FileExistsError as e:
            logger.debug("Directory appeared before mkdir: %s", path)
            raise AlreadyExistsError(f"Directory exists: {path}", path) from e
        except OSError as e:
            msg = f"Failed to create directory: {path} ({e})"
            raise DirectoryCreateError(msg, path) from e
