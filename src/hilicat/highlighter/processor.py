# hilicat/highlighter/processor.py
"""
Content processor: splits chunks of input into lines and renders them.

A Highlighter is a per-stream session. It owns the compiled rules of one
language, the line ending in use, the display options and the LineState
(line counter, squeeze-blank memory and the partial line carried between
chunks). The line rendering itself is done by pure functions so it can be
tested without any session.
"""

import codecs
from dataclasses import dataclass, replace
from typing import Callable, List, Optional, Sequence, Tuple, Union

from ..settings.languages import HighlightConfig, LanguageDefinition
from ..utils.logger import get_logger
from .line import OverlapMode, highlight_line
from .rules import CompiledRule, compile_rules

LF = "\n"
CRLF = "\r\n"

# Width of the line number field, followed by two spaces
LINE_NUMBER_WIDTH = 5
BLANK_NUMBER_PADDING = " " * LINE_NUMBER_WIDTH
END_MARKER = "$"


@dataclass(frozen=True)
class Options:
    """Display options, fixed for a run. All of them can be combined."""

    number_lines: bool = False
    number_nonblank: bool = False
    squeeze_blank: bool = False
    show_ends: bool = False
    overlap: OverlapMode = OverlapMode.FIRST


@dataclass(frozen=True)
class LineState:
    """
    Per-stream state threaded through successive processing calls.

    Attributes:
        line_number: Last line number emitted (0 before the first one).
        last_blank: Whether the previous input line was blank.
        carry: Trailing partial line waiting for the rest of its text.
    """

    line_number: int = 0
    last_blank: bool = False
    carry: str = ""


def is_blank(line: str) -> bool:
    return not line.strip()


def split_lines(text: str, line_ending: str) -> List[str]:
    """
    Split ``text`` on ``line_ending``, dropping the empty segment that a
    trailing terminator leaves behind.
    """
    lines = text.split(line_ending)
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def number_prefix(line_number: int) -> str:
    return f"{line_number:{LINE_NUMBER_WIDTH}d}  "


def process_lines(
    lines: Sequence[str],
    state: LineState,
    options: Options,
    line_ending: str,
    render: Callable[[str], str],
) -> Tuple[str, LineState]:
    """
    Render whole lines with the numbering, squeeze and show-ends options.

    Args:
        lines: Lines without their terminators.
        state: State left by the previous call.
        options: Display options.
        line_ending: Terminator appended after every emitted line.
        render: Function producing the styled text of one line.

    Returns:
        The rendered block and the updated state.
    """
    output = []
    line_number = state.line_number
    last_blank = state.last_blank

    for line in lines:
        blank = is_blank(line)

        if options.squeeze_blank and blank and last_blank:
            continue

        last_blank = blank

        numbered = options.number_lines or (options.number_nonblank and not blank)
        if numbered:
            line_number += 1

        # A blank line under -b shows padding even when -n counted it
        if options.number_nonblank and blank:
            output.append(BLANK_NUMBER_PADDING)
        elif numbered:
            output.append(number_prefix(line_number))

        output.append(render(line))

        if options.show_ends:
            output.append(END_MARKER)

        output.append(line_ending)

    return "".join(output), replace(state, line_number=line_number, last_blank=last_blank)


class Highlighter:
    """
    Highlights one stream of one language.

    Not shared across languages or streams: every input gets its own
    instance, so the line counter never leaks from one file to the next.
    """

    def __init__(
        self,
        language: LanguageDefinition,
        line_ending: str = LF,
        options: Optional[Options] = None,
    ):
        """
        Compile the language's rules.

        Raises:
            PatternCompilationError: If any rule's pattern is malformed.
            ValueError: If ``line_ending`` is empty.
        """
        if not line_ending:
            raise ValueError("line ending must not be empty")

        self.logger = get_logger("hilicat.highlighter")
        self.language = language.name
        self.rules: Tuple[CompiledRule, ...] = compile_rules(language.rules, language.styles)
        self.styles = dict(language.styles)
        self.line_ending = line_ending
        self.options = options or Options()
        self.state = LineState()
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")

        self.logger.debug(
            f"Highlighter ready for '{self.language}' "
            f"({len(self.rules)} rules, line ending {self.line_ending!r})"
        )

    @classmethod
    def from_config(
        cls,
        config: HighlightConfig,
        language: str,
        line_ending: str = LF,
        options: Optional[Options] = None,
    ) -> "Highlighter":
        """
        Build a highlighter for ``language`` from a loaded configuration.

        Raises:
            LanguageNotFoundError: If the language is not configured.
            PatternCompilationError: If any rule's pattern is malformed.
        """
        return cls(config.get_language(language), line_ending, options)

    @property
    def line_number(self) -> int:
        """Last line number emitted so far."""
        return self.state.line_number

    def highlight_line(self, line: str) -> str:
        """Style a single line (no numbering, no terminator)."""
        return highlight_line(line, self.rules, self.options.overlap)

    def _decode(self, data: Union[bytes, bytearray, memoryview, str], final: bool) -> str:
        if isinstance(data, str):
            return data
        return self._decoder.decode(bytes(data), final)

    def process_content(
        self, data: Union[bytes, bytearray, memoryview, str], final: bool = True
    ) -> str:
        """
        Process a chunk of input and return the highlighted output.

        With ``final=False`` the text after the last line ending is held back
        and completed by the next chunk, so a line split across two reads is
        highlighted and numbered once. With the default ``final=True`` the
        chunk is treated as ending the current input and everything is
        emitted.

        Line numbers keep counting across calls.
        """
        text = self._decode(data, final)
        if self.state.carry:
            text = self.state.carry + text

        if final:
            lines = split_lines(text, self.line_ending)
            carry = ""
        else:
            lines = text.split(self.line_ending)
            carry = lines.pop()

        output, state = process_lines(
            lines, self.state, self.options, self.line_ending, self.highlight_line
        )
        self.state = replace(state, carry=carry)
        return output

    def flush(self) -> str:
        """Emit any partial line still held from a non-final chunk."""
        return self.process_content(b"", final=True)


def new_highlighter(
    config: HighlightConfig,
    language: str,
    line_ending: str = LF,
    options: Optional[Options] = None,
) -> Highlighter:
    """
    Build a highlighter for ``language``.

    Raises:
        LanguageNotFoundError: If the language is not configured.
        PatternCompilationError: If any rule's pattern is malformed.
    """
    return Highlighter.from_config(config, language, line_ending, options)


__all__ = [
    "CRLF",
    "LF",
    "Highlighter",
    "LineState",
    "Options",
    "is_blank",
    "new_highlighter",
    "number_prefix",
    "process_lines",
    "split_lines",
]
