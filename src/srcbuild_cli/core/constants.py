"""Constants used by the srcbuild CLI."""

LOGGING_PACKAGES = ("srcbuild", "srcbuild_cli")


class ExitCode:
    """Process exit codes."""

    SUCCESS = 0
    GENERAL_ERROR = 1
    USAGE_ERROR = 2


class Icons:
    """Icons prefixed to console messages."""

    ERROR = "❌"
