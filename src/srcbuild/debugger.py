"""Plugin selection for files in the debugger subtree."""

from __future__ import annotations

from srcbuild_common.constants import DEFAULT_PLUGINS

_TEST_SEGMENTS = ("/test/", "/tests/")


def is_test_file(path: str) -> bool:
    normalized = path.replace("\\", "/")
    return any(segment in normalized for segment in _TEST_SEGMENTS)


def plugins_for(path: str) -> list[str]:
    """Return the plugin list for a debugger source file.

    Tabs are expanded and a final newline is enforced for every file;
    ``debugger`` statements are stripped except in test files, which rely on
    them to pause execution.
    """
    plugins = ["normalize-newlines", "expand-tabs"]
    plugins.extend(p for p in DEFAULT_PLUGINS if p not in plugins)
    if not is_test_file(path):
        plugins.insert(plugins.index("check-brackets"), "strip-debugger-statements")
    plugins.append("ensure-final-newline")
    return plugins
