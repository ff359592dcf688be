"""Error hierarchy for srcbuild.

Every failure the build can surface derives from ``SrcbuildError`` so the
command line can map it to an exit code in one place.
"""

from __future__ import annotations


class SrcbuildError(Exception):
    """Base class for srcbuild errors."""


class InvocationError(SrcbuildError):
    """Raised when the invocation arguments are malformed."""


class ConfigError(SrcbuildError):
    """Raised when build configuration is invalid."""


class _PathError(SrcbuildError):
    """Error attributed to a single filesystem path."""

    def __init__(self, message: str, path: str) -> None:
        super().__init__(message)
        self.path = path


class ReadError(_PathError):
    """Raised when an input file cannot be read."""


class WriteError(_PathError):
    """Raised when an output file cannot be written."""


class AlreadyExistsError(_PathError):
    """Raised when a directory to create is already present."""


class DirectoryCreateError(_PathError):
    """Raised when a directory cannot be created for any other reason."""


class ModuleLoadError(_PathError):
    """Raised when a module fails to load or evaluate.

    Attributes
    ----------
    original_message : str
        Message of the underlying exception
    stack : str
        Formatted traceback of the underlying exception
    """

    def __init__(self, path: str, original_message: str, stack: str) -> None:
        super().__init__(
            f"Failed to load module {path}: {original_message}\nstack: {stack}",
            path,
        )
        self.original_message = original_message
        self.stack = stack


class TransformError(_PathError):
    """Raised when the transformation engine rejects a source file."""

    BANNER = "=" * 24

    def __init__(self, path: str, stack: str) -> None:
        super().__init__(
            f"\n{self.BANNER}\nCOMPILATION ERROR!\n\n"
            f"File:   {path}\nStack:\n\n{stack}\n\n{self.BANNER}\n",
            path,
        )
        self.stack = stack
