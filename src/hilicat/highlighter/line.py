# hilicat/highlighter/line.py
"""
Line highlighter: turns one line of text into its ANSI-styled rendering.

Every compiled rule is searched across the whole line (all occurrences, not
just the first). The matches become tokens, overlaps are resolved and the
styled text is assembled. Text outside matched spans is copied verbatim, so
stripping the escape sequences from the result always gives back the input.
"""

from enum import Enum
from typing import Iterable, List, NamedTuple, Sequence

from .rules import CompiledRule
from .styles import ANSI_RESET


class OverlapMode(str, Enum):
    """How tokens whose spans overlap are arbitrated."""

    # Collected order wins: rules declared earlier claim their spans first.
    FIRST = "first"
    # Interval merge: leftmost token wins, the longest one on equal starts.
    LONGEST = "longest"


class Token(NamedTuple):
    """A located, styled span within a single line."""

    start: int
    end: int
    style: str


def find_tokens(line: str, rules: Iterable[CompiledRule]) -> List[Token]:
    """
    Collect the tokens of every rule, in rule order then position order.

    Zero-width matches carry no text and produce no token.
    """
    tokens: List[Token] = []
    line_lower = None

    for rule in rules:
        if rule.prefilter is not None:
            if line_lower is None:
                line_lower = line.lower()
            if not rule.prefilter(line_lower):
                continue

        for match in rule.pattern.finditer(line):
            start, end = match.span()
            if start == end:
                continue
            tokens.append(Token(start, end, rule.style_code))

    return tokens


def select_first_found(tokens: Sequence[Token]) -> List[Token]:
    """
    Keep tokens in collected order, dropping any that overlaps a kept one.

    Returns the kept tokens sorted by position.
    """
    kept: List[Token] = []
    for token in tokens:
        if any(token.start < other.end and other.start < token.end for other in kept):
            continue
        kept.append(token)
    kept.sort(key=lambda t: t.start)
    return kept


def select_longest(tokens: Sequence[Token]) -> List[Token]:
    """
    Merge tokens by position: sort by start, then by length (longer first),
    and skip every token that starts inside one already taken.
    """
    ordered = sorted(tokens, key=lambda t: (t.start, -(t.end - t.start)))
    kept: List[Token] = []
    covered_until = 0
    for token in ordered:
        # Skip if already covered by previous match
        if token.start < covered_until:
            continue
        kept.append(token)
        covered_until = token.end
    return kept


def render_tokens(line: str, tokens: Sequence[Token]) -> str:
    """
    Render position-ordered, disjoint tokens over ``line``.

    Tokens with an empty style are emitted as plain text.
    """
    result = []
    last_end = 0

    for start, end, style in tokens:
        # Add text before this match
        if start > last_end:
            result.append(line[last_end:start])

        if style:
            result.append(style)
            result.append(line[start:end])
            result.append(ANSI_RESET)
        else:
            result.append(line[start:end])

        last_end = end

    # Add remaining text
    if last_end < len(line):
        result.append(line[last_end:])

    return "".join(result)


def highlight_line(
    line: str,
    rules: Sequence[CompiledRule],
    overlap: OverlapMode = OverlapMode.FIRST,
) -> str:
    """
    Apply highlighting to a single line.

    Args:
        line: The line to highlight, without its line ending.
        rules: Compiled rules in declaration order.
        overlap: Overlap arbitration mode.

    Returns:
        The styled line, or ``line`` itself when no rule matched.
    """
    tokens = find_tokens(line, rules)
    if not tokens:
        return line

    if overlap == OverlapMode.LONGEST:
        selected = select_longest(tokens)
    else:
        selected = select_first_found(tokens)

    return render_tokens(line, selected)


__all__ = [
    "OverlapMode",
    "Token",
    "find_tokens",
    "highlight_line",
    "render_tokens",
    "select_first_found",
    "select_longest",
]
