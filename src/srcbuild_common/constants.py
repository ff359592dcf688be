"""Shared constants for srcbuild packages."""

PROJECT_CONFIG_FILENAME = ".srcbuild.yaml"
USER_CONFIG_SUBDIR = "srcbuild"
USER_CONFIG_FILENAME = "config.yaml"

# Source suffix appended to module specifiers that lack one
MODULE_SUFFIX = ".py"

DEPENDENCY_MARKER = "dep:"

DEBUGGER_SUBTREE = "devtools/client/debugger"

DEFAULT_PLUGINS = (
    "normalize-newlines",
    "strip-trailing-whitespace",
    "check-brackets",
)

RUNTIME_MODES = ("auto", "native", "emulated")


class EnvVars:
    """Environment variable names read by srcbuild."""

    RUNTIME = "SRCBUILD_RUNTIME"
    LOG_LEVEL = "SRCBUILD_LOG_LEVEL"
    LOG_FILE = "SRCBUILD_LOG_FILE"
    ENGINE = "SRCBUILD_ENGINE"
