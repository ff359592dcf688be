"""Tests for srcbuild.debugger."""

import pytest

from srcbuild import debugger
from srcbuild_common.constants import DEFAULT_PLUGINS


@pytest.mark.unit
class TestPluginsFor:
    """Tests for plugins_for."""

    def test_source_file_plugins(self):
        """Test the plugin list for regular debugger sources."""
        plugins = debugger.plugins_for("devtools/client/debugger/src/main.js")
        assert plugins == [
            "normalize-newlines",
            "expand-tabs",
            "strip-trailing-whitespace",
            "strip-debugger-statements",
            "check-brackets",
            "ensure-final-newline",
        ]

    def test_test_files_keep_debugger_statements(self):
        """Test that test files do not strip debugger statements."""
        plugins = debugger.plugins_for("devtools/client/debugger/test/helpers.js")
        assert "strip-debugger-statements" not in plugins
        assert plugins[-1] == "ensure-final-newline"

    def test_includes_every_default_plugin(self):
        """Test that the debugger list extends the default list."""
        plugins = debugger.plugins_for("devtools/client/debugger/src/a.js")
        assert set(DEFAULT_PLUGINS) <= set(plugins)

    def test_windows_separators(self):
        """Test that backslash paths are recognized as test files."""
        assert debugger.is_test_file("devtools\\client\\debugger\\tests\\a.js")
