# tests/test_line_highlighter.py
"""
Tests for the line highlighter: token collection, overlap arbitration and
rendering.
"""

import os
import sys
from dataclasses import replace

import pytest

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

CYAN = "\033[36m"
GREEN = "\033[32m"
RED = "\033[31m"
RESET = "\033[0m"


def compile_pairs(*pairs, styles=None):
    """Compile (pattern, style) pairs into rules named rule0, rule1, ..."""
    from hilicat.highlighter.rules import compile_rules
    from hilicat.settings.languages import HighlightRule

    rules = [
        HighlightRule(f"rule{index}", pattern, style)
        for index, (pattern, style) in enumerate(pairs)
    ]
    return compile_rules(rules, styles or {})


class TestHighlightLine:
    """Tests for highlight_line."""

    def test_go_keyword_scenario(self):
        """Test func is wrapped in cyan and the rest is untouched."""
        from hilicat.highlighter.line import highlight_line

        rules = compile_pairs((r"\b(func|package)\b", "keyword"), styles={"keyword": "cyan"})
        result = highlight_line("func main() {}", rules)

        assert result == f"{CYAN}func{RESET} main() {{}}"

    def test_no_match_returns_line_itself(self):
        """Test the fast path returns the very same string."""
        from hilicat.highlighter.line import highlight_line

        rules = compile_pairs((r"\b(func|package)\b", "cyan"))
        line = "nothing interesting here"

        assert highlight_line(line, rules) is line

    def test_no_rules(self):
        """Test a language without rules leaves lines alone."""
        from hilicat.highlighter.line import highlight_line

        assert highlight_line("func main", ()) == "func main"

    def test_all_occurrences_are_styled(self):
        """Test every match of a rule is highlighted, not just the first."""
        from hilicat.highlighter.line import highlight_line

        rules = compile_pairs((r"\d+", "red"))
        result = highlight_line("1 + 22 = 23", rules)

        assert result == f"{RED}1{RESET} + {RED}22{RESET} = {RED}23{RESET}"

    def test_unknown_style_emits_plain_text(self):
        """Test a match with an unresolvable style gets no escape codes at all."""
        from hilicat.highlighter.line import highlight_line

        rules = compile_pairs((r"\bfunc\b", "sparkly"))
        result = highlight_line("func main", rules)

        assert result == "func main"
        assert "\033" not in result

    def test_zero_width_matches_are_skipped(self):
        """Test empty matches produce no styling."""
        from hilicat.highlighter.line import highlight_line

        rules = compile_pairs((r"\b", "red"), (r"x*", "green"))
        assert highlight_line("abc def", rules) == "abc def"

    def test_later_rule_at_earlier_position(self):
        """Test disjoint tokens render in position order whatever the rule order."""
        from hilicat.highlighter.line import highlight_line

        rules = compile_pairs(("bar", "red"), ("foo", "green"))
        result = highlight_line("foobar", rules)

        assert result == f"{GREEN}foo{RESET}{RED}bar{RESET}"


class TestOverlapModes:
    """Tests for resolving overlapping matches."""

    def test_first_mode_earlier_rule_wins(self):
        """Test an earlier rule keeps its span against a longer later match."""
        from hilicat.highlighter.line import OverlapMode, highlight_line

        rules = compile_pairs(("foo", "red"), ("foobar", "green"))
        result = highlight_line("foobar", rules, OverlapMode.FIRST)

        assert result == f"{RED}foo{RESET}bar"

    def test_first_mode_drops_partial_overlap(self):
        """Test a later match straddling a claimed span is dropped."""
        from hilicat.highlighter.line import highlight_line

        rules = compile_pairs(("foo", "red"), ("o+b", "green"))
        assert highlight_line("foobar", rules) == f"{RED}foo{RESET}bar"

    def test_longest_mode_prefers_longest_at_same_start(self):
        """Test the interval merge keeps the longest token on equal starts."""
        from hilicat.highlighter.line import OverlapMode, highlight_line

        rules = compile_pairs(("foo", "red"), ("foobar", "green"))
        result = highlight_line("foobar", rules, OverlapMode.LONGEST)

        assert result == f"{GREEN}foobar{RESET}"

    def test_longest_mode_leftmost_wins(self):
        """Test a token starting inside an emitted one is skipped."""
        from hilicat.highlighter.line import OverlapMode, highlight_line

        rules = compile_pairs(("oba", "red"), ("foo", "green"))
        result = highlight_line("foobar", rules, OverlapMode.LONGEST)

        assert result == f"{GREEN}foo{RESET}bar"

    @pytest.mark.parametrize("mode", ["first", "longest"])
    def test_content_is_preserved(self, mode):
        """Test stripping escapes always gives back the input line."""
        from hilicat.highlighter.line import OverlapMode, highlight_line
        from hilicat.highlighter.styles import strip_ansi

        rules = compile_pairs(
            (r"\b(func|package|return)\b", "cyan"),
            (r'"[^"]*"', "green"),
            (r"//.*", "yellow"),
            (r"\d+", "magenta"),
            (r"\w+\(", "bold"),
        )
        lines = [
            'func main() { return "42" } // 42 func',
            'package "x" // "y" 7',
            "",
            "   ",
            "añadir(ünïcode) 12",
        ]
        for line in lines:
            assert strip_ansi(highlight_line(line, rules, OverlapMode(mode))) == line


class TestTokenSelection:
    """Tests for the token helpers used by highlight_line."""

    def test_find_tokens_order(self):
        """Test tokens come in rule order, then position order."""
        from hilicat.highlighter.line import Token, find_tokens

        rules = compile_pairs(("b", "red"), ("a", "green"))
        tokens = find_tokens("abab", rules)

        assert tokens == [
            Token(1, 2, RED),
            Token(3, 4, RED),
            Token(0, 1, GREEN),
            Token(2, 3, GREEN),
        ]

    def test_select_first_found(self):
        """Test overlapping tokens after the first are dropped and the rest sorted."""
        from hilicat.highlighter.line import Token, select_first_found

        tokens = [Token(4, 8, "x"), Token(0, 2, "y"), Token(6, 9, "z")]
        assert select_first_found(tokens) == [Token(0, 2, "y"), Token(4, 8, "x")]

    def test_select_longest(self):
        """Test the interval merge."""
        from hilicat.highlighter.line import Token, select_longest

        tokens = [Token(0, 3, "a"), Token(0, 6, "b"), Token(4, 8, "c"), Token(6, 7, "d")]
        assert select_longest(tokens) == [Token(0, 6, "b"), Token(6, 7, "d")]

    def test_render_tokens_plain_style(self):
        """Test tokens with an empty style are copied verbatim."""
        from hilicat.highlighter.line import Token, render_tokens

        result = render_tokens("abcdef", [Token(0, 2, ""), Token(3, 5, RED)])
        assert result == f"abc{RED}de{RESET}f"


class TestPrefilter:
    """Tests for the keyword pre-filter."""

    def test_prefilter_never_changes_results(self):
        """Test rules with and without a pre-filter highlight identically."""
        from hilicat.highlighter.line import highlight_line

        rules = compile_pairs((r"\b(func|fail(?:ure|ed)?)\b", "red"))
        assert rules[0].prefilter is not None
        unfiltered = tuple(replace(rule, prefilter=None) for rule in rules)

        for line in ["func x", "FUNC x", "failure and failed", "funcs", "nothing"]:
            assert highlight_line(line, rules) == highlight_line(line, unfiltered)

    @pytest.mark.parametrize(
        "pattern, line",
        [
            (r"\b(co(?:lo)r)\b", "color"),
            (r"\b(a(?:b)?c)\b", "abc"),
            (r"\b(x|co(?:lo)r)\b", "my color"),
        ],
    )
    def test_inner_group_still_matches(self, pattern, line):
        """Test a group inside a keyword does not hide real matches."""
        from hilicat.highlighter.line import highlight_line

        rules = compile_pairs((pattern, "red"))
        unfiltered = tuple(replace(rule, prefilter=None) for rule in rules)

        result = highlight_line(line, rules)
        assert result == highlight_line(line, unfiltered)
        assert RED in result
