# hilicat/highlighter/styles.py
"""
Style Registry: the single source of truth for ANSI escape sequences.

Maps human-readable style keywords to SGR escape codes. Resolution never
fails: an unknown keyword resolves to the empty string, which means "emit no
escape code and no reset either". ``reset`` is a regular keyword of its own.

Usage:
    from hilicat.highlighter.styles import ANSI_RESET, colorize, resolve_style

    resolve_style("cyan")        # "\\033[36m"
    resolve_style("bold red")    # "\\033[1m\\033[31m"
    resolve_style("no-such")     # ""
"""

import re
from typing import Dict

ANSI_RESET = "\033[0m"

# Mapping of logical color names to ANSI color indices (0-7)
ANSI_COLOR_MAP: Dict[str, int] = {
    "black": 0,
    "red": 1,
    "green": 2,
    "yellow": 3,
    "blue": 4,
    "magenta": 5,
    "cyan": 6,
    "white": 7,
}

# ANSI SGR modifier codes
ANSI_MODIFIERS: Dict[str, str] = {
    "bold": "1",
    "dim": "2",
    "italic": "3",
    "underline": "4",
    "blink": "5",
    "reverse": "7",
    "strikethrough": "9",
}


def _sgr(code: str) -> str:
    return f"\033[{code}m"


def _build_style_table() -> Dict[str, str]:
    table = {"reset": ANSI_RESET}
    for name, code in ANSI_MODIFIERS.items():
        table[name] = _sgr(code)
    for name, index in ANSI_COLOR_MAP.items():
        table[name] = _sgr(str(30 + index))
        table[f"bright_{name}"] = _sgr(str(90 + index))
        table[f"bg_{name}"] = _sgr(str(40 + index))
    return table


# Keyword -> escape sequence, e.g. "red" -> "\033[31m", "bg_blue" -> "\033[44m"
STYLE_CODES: Dict[str, str] = _build_style_table()

# Pre-compiled pattern matching SGR sequences (colors and text attributes)
ANSI_SGR_PATTERN = re.compile(r"\x1b\[[0-9;]*m")


def resolve_style(name: str) -> str:
    """
    Resolve a style keyword to its ANSI escape sequence.

    A whitespace-separated combination such as ``"bold red"`` resolves to the
    concatenated codes of its parts. If any part is unknown the whole name
    resolves to ``""`` so a style is never half applied.

    Args:
        name: Style keyword or combination of keywords.

    Returns:
        The escape sequence, or an empty string for unknown names.
    """
    if not name:
        return ""
    code = STYLE_CODES.get(name)
    if code is not None:
        return code

    parts = name.split()
    if len(parts) < 2:
        return ""
    codes = []
    for part in parts:
        part_code = STYLE_CODES.get(part)
        if part_code is None:
            return ""
        codes.append(part_code)
    return "".join(codes)


def is_known_style(name: str) -> bool:
    """Check whether ``name`` resolves to a non-empty escape sequence."""
    return bool(resolve_style(name))


def colorize(text: str, style: str) -> str:
    """
    Wrap ``text`` in the escape code for ``style`` followed by a reset.

    Unknown styles leave the text untouched.
    """
    code = resolve_style(style)
    if not code:
        return text
    return f"{code}{text}{ANSI_RESET}"


def strip_ansi(text: str) -> str:
    """Remove SGR escape sequences from ``text``."""
    return ANSI_SGR_PATTERN.sub("", text)


__all__ = [
    "ANSI_RESET",
    "ANSI_COLOR_MAP",
    "ANSI_MODIFIERS",
    "ANSI_SGR_PATTERN",
    "STYLE_CODES",
    "colorize",
    "is_known_style",
    "resolve_style",
    "strip_ansi",
]
