"""Main CLI entry point for srcbuild.

``srcbuild SOURCE_FILE... OUTPUT_DIR`` takes positional paths only; behavior is
tuned through ``.srcbuild.yaml`` and ``SRCBUILD_*`` environment variables.
"""

import sys
from collections.abc import Sequence

import click

from srcbuild.driver import BuildDriver, format_dependencies
from srcbuild.runtime import detect_runtime
from srcbuild.settings import BuildSettings, load_settings
from srcbuild_cli.core.constants import LOGGING_PACKAGES
from srcbuild_cli.core.decorators import handle_exceptions
from srcbuild_cli.core.utils import CliOutput
from srcbuild_logging import configure_logger, get_cli_logger

logger = get_cli_logger(__name__)

CONTEXT_SETTINGS = {
    "ignore_unknown_options": True,
    "help_option_names": [],
}


def _configure_logging(settings: BuildSettings) -> None:
    """Configure package loggers from build settings."""
    for pkg_name in LOGGING_PACKAGES:
        configure_logger(
            pkg_name,
            profile="cli",
            level=settings.log_level,
            log_file=settings.log_file,
        )


@click.command(context_settings=CONTEXT_SETTINGS)
@click.argument("paths", nargs=-1, type=click.UNPROCESSED)
@handle_exceptions
def cli(paths: Sequence[str]) -> None:
    """Compile SOURCE_FILE... into OUTPUT_DIR and report dependencies."""
    settings = load_settings()
    _configure_logging(settings)

    runtime = detect_runtime(settings.runtime)
    logger.info("Using %s runtime", runtime.name)

    driver = BuildDriver.from_settings(settings, runtime)
    argv = runtime.invocation_arguments([driver.script_path, *paths])
    result = driver.run(argv)

    CliOutput.plain(format_dependencies(result.dependencies))


def main() -> None:
    """Serve as the console script entry point."""
    cli(prog_name="srcbuild", args=sys.argv[1:])


if __name__ == "__main__":
    main()
