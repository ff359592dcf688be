"""Click decorators shared by srcbuild commands."""

import functools
from collections.abc import Callable
from typing import Any, TypeVar

import click

from srcbuild.errors import InvocationError, SrcbuildError
from srcbuild_cli.core.constants import ExitCode
from srcbuild_cli.core.utils import CliOutput
from srcbuild_logging import get_cli_logger

logger = get_cli_logger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def handle_exceptions(func: F) -> F:
    """Convert build failures into error output and exit codes.

    Parameters
    ----------
    func : Callable
        Command callback to wrap

    Returns
    -------
    Callable
        Wrapped callback
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs) -> Any:
        ctx = click.get_current_context()
        try:
            return func(*args, **kwargs)
        except click.exceptions.Exit:
            raise
        except InvocationError as e:
            CliOutput.error(str(e))
            ctx.exit(ExitCode.USAGE_ERROR)
        except SrcbuildError as e:
            logger.debug("Build failed", exc_info=True)
            CliOutput.error(str(e))
            ctx.exit(ExitCode.GENERAL_ERROR)
        except Exception as e:
            logger.exception("Unexpected error")
            CliOutput.error(f"Unexpected error: {e}")
            ctx.exit(ExitCode.GENERAL_ERROR)

    return wrapper  # type: ignore[return-value]
