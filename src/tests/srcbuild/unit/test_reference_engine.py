"""Tests for srcbuild.engine."""

import pytest

from srcbuild.engine import (
    PLUGINS,
    EngineError,
    TransformResult,
    available_plugins,
    register_plugin,
    transform,
)


@pytest.mark.unit
class TestTransform:
    """Tests for transform."""

    def test_no_plugins_returns_text(self):
        """Test that an empty plugin list leaves the text unchanged."""
        assert transform("a\r\n", []) == TransformResult(code="a\r\n")

    def test_applies_plugins_in_order(self):
        """Test that plugin order changes the result."""
        text = "x\t \r\n"
        stripped_first = transform(text, ["strip-trailing-whitespace", "normalize-newlines"])
        normalized_first = transform(text, ["normalize-newlines", "strip-trailing-whitespace"])
        assert stripped_first.code == "x\t \n"
        assert normalized_first.code == "x\n"

    def test_unknown_plugin_rejected(self):
        """Test that unknown plugin names raise EngineError before running."""
        with pytest.raises(EngineError, match="proposal-class-properties"):
            transform("x", ["normalize-newlines", "proposal-class-properties"])

    def test_registered_plugins_listed(self):
        """Test that built-in plugins are registered."""
        assert {
            "normalize-newlines",
            "strip-trailing-whitespace",
            "expand-tabs",
            "strip-debugger-statements",
            "ensure-final-newline",
            "check-brackets",
        } <= set(available_plugins())

    def test_register_plugin(self):
        """Test registering a custom plugin."""

        @register_plugin("upper-case")
        def upper(text: str) -> str:
            return text.upper()

        try:
            assert transform("abc", ["upper-case"]).code == "ABC"
        finally:
            PLUGINS.pop("upper-case")


@pytest.mark.unit
class TestTextPlugins:
    """Tests for the simple text plugins."""

    def test_expand_tabs(self):
        """Test tab expansion to two columns."""
        assert transform("\tx", ["expand-tabs"]).code == "  x"

    def test_strip_debugger_statements(self):
        """Test that standalone debugger statements are removed."""
        text = "a();\n  debugger;\nb();\nconst debuggerEnabled = 1;\n"
        result = transform(text, ["strip-debugger-statements"])
        assert result.code == "a();\nb();\nconst debuggerEnabled = 1;\n"

    def test_ensure_final_newline(self):
        """Test that a missing final newline is added once."""
        assert transform("x", ["ensure-final-newline"]).code == "x\n"
        assert transform("x\n", ["ensure-final-newline"]).code == "x\n"
        assert transform("", ["ensure-final-newline"]).code == ""


@pytest.mark.unit
class TestCheckBrackets:
    """Tests for the check-brackets plugin."""

    def test_balanced_source_unchanged(self):
        """Test that balanced code passes through."""
        code = "function f(a) {\n  return [a, {b: (1)}];\n}\n"
        assert transform(code, ["check-brackets"]).code == code

    def test_ignores_brackets_in_strings_and_comments(self):
        """Test that literals and comments are skipped."""
        code = (
            "const s = ')]}' + \"({[\" + `${x}`;\n"
            "// unbalanced ( in comment\n"
            "/* and { here */\n"
            "const r = 'it\\'s';\n"
        )
        assert transform(code, ["check-brackets"]).code == code

    def test_unclosed_bracket(self):
        """Test reporting of an unclosed bracket with its position."""
        with pytest.raises(EngineError, match=r"Unclosed '\(' opened at line 2, column 10"):
            transform("f() {\n  return (1;\n", ["check-brackets"])

    def test_unexpected_closer(self):
        """Test reporting of a mismatched closing bracket."""
        with pytest.raises(EngineError, match=r"Unexpected '\]' at line 1, column 3"):
            transform("(1]", ["check-brackets"])

    def test_unterminated_string(self):
        """Test that a string literal broken by a newline is rejected."""
        with pytest.raises(EngineError, match="Unterminated string"):
            transform("const a = 'oops\n';\n", ["check-brackets"])

    def test_unterminated_block_comment(self):
        """Test that an open block comment is rejected."""
        with pytest.raises(EngineError, match="Unterminated block comment"):
            transform("/* never closed", ["check-brackets"])
