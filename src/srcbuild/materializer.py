"""Recursive output directory creation."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from srcbuild.errors import AlreadyExistsError, DirectoryCreateError
from srcbuild.fs import Filesystem
from srcbuild.paths import PathUtil
from srcbuild_logging import get_cli_logger

logger = get_cli_logger(__name__)


class DirectoryStatus(Enum):
    """Outcome of creating one directory level."""

    CREATED = "created"
    EXISTED = "existed"
    FAILED = "failed"


@dataclass(frozen=True)
class CreateOutcome:
    status: DirectoryStatus
    error: DirectoryCreateError | None = None


class DirectoryMaterializer:
    """Make a directory and any missing ancestors exist."""

    def __init__(self, fs: Filesystem, paths: PathUtil) -> None:
        self.fs = fs
        self.paths = paths

    def ensure(self, directory: str) -> DirectoryStatus:
        """Ensure ``directory`` exists, creating ancestors parent first.

        Returns
        -------
        DirectoryStatus
            ``CREATED`` if this call made the directory, ``EXISTED`` otherwise

        Raises
        ------
        DirectoryCreateError
            If a level cannot be created for a reason other than existing
        """
        directory = directory or "."
        if self.fs.exists(directory):
            return DirectoryStatus.EXISTED

        parent = self.paths.dirname(directory)
        if parent != directory:
            self.ensure(parent)

        outcome = self.create(directory)
        if outcome.error is not None:
            raise outcome.error
        logger.debug("Directory %s: %s", directory, outcome.status.value)
        return outcome.status

    def create(self, directory: str) -> CreateOutcome:
        """Create a single level, folding the already-exists race into ``EXISTED``."""
        try:
            self.fs.make_directory(directory)
        except AlreadyExistsError:
            return CreateOutcome(DirectoryStatus.EXISTED)
        except DirectoryCreateError as e:
            return CreateOutcome(DirectoryStatus.FAILED, e)
        return CreateOutcome(DirectoryStatus.CREATED)
