# hilicat/highlighter/rules.py
"""
Rule compilation for the highlighting engine.

This module contains:
- CompiledRule: a rule with its pattern compiled and its style resolved
- compile_rule / compile_rules: fail-fast compilation of a language's rules
- Helper functions for the keyword pre-filter
"""

import re
from dataclasses import dataclass
from typing import Any, Callable, List, Mapping, Optional, Sequence, Tuple

# Use regex module (PCRE2-like engine) for rule patterns
import regex as re_engine

from ..settings.languages import HighlightRule
from ..utils.exceptions import PatternCompilationError
from ..utils.logger import get_logger
from .styles import resolve_style

logger = get_logger("hilicat.highlighter.rules")

# Pre-compiled pattern for extracting keywords from alternation patterns
KEYWORD_PATTERN = re.compile(r"^\\b\(([a-zA-Z|?:()]+)\)\\b$")

# Non-capturing suffix group such as (?:ure|ed)? at the end of a keyword
_SUFFIX_GROUP_PATTERN = re.compile(r"\(\?:[^()]+\)\??$")


def smart_split_alternation(inner: str) -> List[str]:
    """
    Split a regex alternation pattern on | characters that are not inside parentheses.

    Example: "error|fail(?:ure|ed)?|fatal" -> ["error", "fail(?:ure|ed)?", "fatal"]

    Args:
        inner: The inner content of an alternation pattern.

    Returns:
        List of parts split on top-level | characters.
    """
    parts = []
    current = ""
    depth = 0
    for char in inner:
        if char == "(":
            depth += 1
            current += char
        elif char == ")":
            depth -= 1
            current += char
        elif char == "|" and depth == 0:
            parts.append(current)
            current = ""
        else:
            current += char
    parts.append(current)
    return parts


def extract_keywords(pattern: str) -> Optional[Tuple[str, ...]]:
    """
    Extract the literal base words of a word-boundary alternation pattern.

    Patterns like \\b(func|fail(?:ure|ed)?)\\b give ('func', 'fail'): every
    match of the pattern contains at least one of the returned words.

    Returns None unless every alternative reduces to a plain word, since a
    partial keyword list would make the pre-filter skip real matches. A
    (?:...) group is only dropped as a trailing suffix; anywhere else the
    remaining letters need not appear in the matched text.
    """
    match = KEYWORD_PATTERN.match(pattern)
    if not match:
        return None

    words = []
    for part in smart_split_alternation(match.group(1)):
        clean = _SUFFIX_GROUP_PATTERN.sub("", part, count=1)
        if not clean or not clean.isalpha():
            return None
        words.append(clean.lower())

    return tuple(dict.fromkeys(words))


def extract_prefilter(pattern: str) -> Optional[Callable[[str], bool]]:
    """
    Create a fast pre-filter function for a rule pattern.

    Pre-filters are simple substring checks run against the lowercased line
    before the regex. If the pre-filter returns False, the regex is skipped.

    Args:
        pattern: The regex pattern string.

    Returns:
        A pre-filter function, or None if no safe pre-filter can be created.
    """
    keywords = extract_keywords(pattern)
    if not keywords:
        return None
    return lambda line_lower: any(kw in line_lower for kw in keywords)


@dataclass(slots=True, frozen=True)
class CompiledRule:
    """
    A highlight rule ready for matching.

    Attributes:
        name: Rule name from the language definition.
        pattern: Compiled regex pattern.
        style: Style name declared by the rule.
        style_code: Resolved ANSI sequence ("" means emit unstyled).
        prefilter: Optional function that returns True if the regex should run.
    """

    name: str
    pattern: Any  # Compiled regex pattern
    style: str
    style_code: str
    prefilter: Optional[Callable[[str], bool]] = None


def resolve_rule_style(style: str, styles: Optional[Mapping[str, str]] = None) -> str:
    """
    Resolve a rule's style name to an escape sequence.

    The name is first looked up in the language's ``styles`` mapping
    (style name -> style keyword). Names the mapping does not know are
    treated as style keywords themselves.
    """
    keyword = style
    if styles and style in styles:
        keyword = styles[style]
    return resolve_style(keyword)


def compile_rule(
    rule: HighlightRule, styles: Optional[Mapping[str, str]] = None
) -> CompiledRule:
    """
    Compile a single rule.

    Raises:
        PatternCompilationError: If the pattern is empty or malformed.
    """
    if not rule.pattern:
        raise PatternCompilationError(rule.name, rule.pattern, "empty pattern")
    try:
        pattern = re_engine.compile(rule.pattern)
    except re_engine.error as e:
        raise PatternCompilationError(rule.name, rule.pattern, str(e)) from e

    return CompiledRule(
        name=rule.name,
        pattern=pattern,
        style=rule.style,
        style_code=resolve_rule_style(rule.style, styles),
        prefilter=extract_prefilter(rule.pattern),
    )


def compile_rules(
    rules: Sequence[HighlightRule], styles: Optional[Mapping[str, str]] = None
) -> Tuple[CompiledRule, ...]:
    """
    Compile a language's rules in declaration order.

    Compilation is all-or-nothing: the first malformed pattern aborts the
    whole operation and no partial rule set is returned.

    Args:
        rules: Ordered rules of one language.
        styles: The language's style name -> style keyword mapping.

    Returns:
        Tuple of CompiledRule, in the same order as ``rules``.

    Raises:
        PatternCompilationError: Naming the first offending rule.
    """
    compiled = tuple(compile_rule(rule, styles) for rule in rules)
    prefiltered = sum(1 for rule in compiled if rule.prefilter is not None)
    logger.debug(
        f"Compiled {len(compiled)} rules ({prefiltered} with keyword pre-filter)"
    )
    return compiled


__all__ = [
    "CompiledRule",
    "KEYWORD_PATTERN",
    "compile_rule",
    "compile_rules",
    "extract_keywords",
    "extract_prefilter",
    "resolve_rule_style",
    "smart_split_alternation",
]
