# hilicat/highlighter/__init__.py
"""
Regex-driven syntax highlighting engine.

This package provides:
- Style registry: style keywords -> ANSI escape sequences
- Rule compiler: language rules -> compiled matchers
- Line highlighter: one line -> styled line
- Content processor: chunks of bytes -> numbered, styled text blocks

Usage:
    from hilicat.highlighter import Options, new_highlighter

    highlighter = new_highlighter(config, "go", "\\n", Options(number_lines=True))
    print(highlighter.process_content(b"func main() {}\\n"), end="")
"""

from .line import OverlapMode, Token, find_tokens, highlight_line
from .processor import (
    CRLF,
    LF,
    Highlighter,
    LineState,
    Options,
    new_highlighter,
    process_lines,
)
from .rules import CompiledRule, compile_rules
from .styles import ANSI_RESET, colorize, resolve_style, strip_ansi

__all__ = [
    # Constants
    "ANSI_RESET",
    "CRLF",
    "LF",
    # Classes
    "CompiledRule",
    "Highlighter",
    "LineState",
    "Options",
    "OverlapMode",
    "Token",
    # Functions
    "colorize",
    "compile_rules",
    "find_tokens",
    "highlight_line",
    "new_highlighter",
    "process_lines",
    "resolve_style",
    "strip_ansi",
]
