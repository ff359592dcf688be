"""Console output helpers for the srcbuild CLI."""

import click

from srcbuild_cli.core.constants import Icons


def format_error(msg: str) -> str:
    """Format an error message with red color and icon.

    Parameters
    ----------
    msg : str
        Message to format

    Returns
    -------
    str
        Formatted message
    """
    return click.style(f"{Icons.ERROR} {msg}", fg="red")


class CliOutput:
    """Console output with consistent formatting.

    Diagnostics go to stderr; only :meth:`plain` writes to stdout.
    """

    @staticmethod
    def plain(message: str) -> None:
        """Echo an unformatted message to stdout."""
        click.echo(message)

    @staticmethod
    def error(message: str) -> None:
        """Echo an error message to stderr."""
        click.echo(format_error(message), err=True)
