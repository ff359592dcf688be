"""Reference source-to-source transformation engine.

The engine applies named text plugins in the order given. Plugins are
registered at import time with :func:`register_plugin`; any plugin may reject
its input by raising :class:`EngineError`.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass

PluginFunc = Callable[[str], str]

TAB_SIZE = 2

PLUGINS: dict[str, PluginFunc] = {}

_DEBUGGER_STATEMENT_RE = re.compile(r"^[ \t]*debugger[ \t]*;?[ \t]*$")

_OPENERS = {"(": ")", "[": "]", "{": "}"}
_CLOSERS = {v: k for k, v in _OPENERS.items()}
_QUOTES = ("'", '"', "`")


class EngineError(Exception):
    """Raised when a plugin rejects the source text."""


@dataclass(frozen=True)
class TransformResult:
    """Output of a transform call."""

    code: str


def register_plugin(name: str) -> Callable[[PluginFunc], PluginFunc]:
    """Register a plugin function under ``name``."""

    def decorator(func: PluginFunc) -> PluginFunc:
        PLUGINS[name] = func
        return func

    return decorator


def available_plugins() -> list[str]:
    return sorted(PLUGINS)


def transform(text: str, plugins: Sequence[str]) -> TransformResult:
    """Run ``text`` through ``plugins`` in order.

    Parameters
    ----------
    text : str
        Source text
    plugins : Sequence[str]
        Plugin names; order is significant

    Returns
    -------
    TransformResult
        The transformed text

    Raises
    ------
    EngineError
        If a plugin is unknown or rejects the source
    """
    unknown = [name for name in plugins if name not in PLUGINS]
    if unknown:
        msg = f"Unknown plugin(s): {', '.join(unknown)}"
        raise EngineError(msg)

    for name in plugins:
        text = PLUGINS[name](text)
    return TransformResult(code=text)


@register_plugin("normalize-newlines")
def normalize_newlines(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


@register_plugin("strip-trailing-whitespace")
def strip_trailing_whitespace(text: str) -> str:
    return "\n".join(line.rstrip(" \t") for line in text.split("\n"))


@register_plugin("expand-tabs")
def expand_tabs(text: str) -> str:
    return text.expandtabs(TAB_SIZE)


@register_plugin("strip-debugger-statements")
def strip_debugger_statements(text: str) -> str:
    lines = text.split("\n")
    return "\n".join(line for line in lines if not _DEBUGGER_STATEMENT_RE.match(line))


@register_plugin("ensure-final-newline")
def ensure_final_newline(text: str) -> str:
    if text and not text.endswith("\n"):
        return text + "\n"
    return text


@register_plugin("check-brackets")
def check_brackets(text: str) -> str:  # noqa: C901
    """Reject sources with unbalanced brackets.

    String literals and ``//``/``/* */`` comments are skipped. The text is
    returned unchanged when it is balanced.
    """
    stack: list[tuple[str, int, int]] = []
    line, col = 1, 0
    quote: str | None = None
    in_line_comment = False
    in_block_comment = False
    i = 0
    while i < len(text):
        ch = text[i]
        nxt = text[i + 1] if i + 1 < len(text) else ""
        col += 1

        if ch == "\n":
            line, col = line + 1, 0
            in_line_comment = False
            if quote in ("'", '"'):
                msg = f"Unterminated string literal at line {line - 1}"
                raise EngineError(msg)
        elif in_line_comment:
            pass
        elif in_block_comment:
            if ch == "*" and nxt == "/":
                in_block_comment = False
                i += 1
                col += 1
        elif quote is not None:
            if ch == "\\":
                i += 1
                if nxt == "\n":
                    line, col = line + 1, 0
                else:
                    col += 1
            elif ch == quote:
                quote = None
        elif ch == "/" and nxt == "/":
            in_line_comment = True
        elif ch == "/" and nxt == "*":
            in_block_comment = True
            i += 1
            col += 1
        elif ch in _QUOTES:
            quote = ch
        elif ch in _OPENERS:
            stack.append((ch, line, col))
        elif ch in _CLOSERS:
            if not stack or stack[-1][0] != _CLOSERS[ch]:
                msg = f"Unexpected '{ch}' at line {line}, column {col}"
                raise EngineError(msg)
            stack.pop()
        i += 1

    if quote is not None:
        msg = f"Unterminated string literal opened with {quote}"
        raise EngineError(msg)
    if in_block_comment:
        msg = "Unterminated block comment"
        raise EngineError(msg)
    if stack:
        opener, open_line, open_col = stack[-1]
        msg = f"Unclosed '{opener}' opened at line {open_line}, column {open_col}"
        raise EngineError(msg)
    return text
