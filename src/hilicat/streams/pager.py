# hilicat/streams/pager.py
"""
Output sinks: standard output and an external pager such as ``less -R``.

A sink accepts highlighted text through ``write`` and reports whether the
reader is still listening. Once the user quits the pager (broken pipe) the
sink turns closed and further writes are ignored.
"""

import subprocess
import sys
from typing import Optional, Sequence, TextIO

from ..settings.config import get_pager_command
from ..utils.logger import get_logger
from ..utils.platform import has_command


class StdoutSink:
    """Writes to a text stream, standard output by default."""

    def __init__(self, stream: Optional[TextIO] = None):
        self._stream = stream
        self.closed = False

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def write(self, text: str) -> bool:
        if self.closed:
            return False
        try:
            self.stream.write(text)
            self.stream.flush()
        except BrokenPipeError:
            self.closed = True
        return not self.closed

    def close(self) -> None:
        self.closed = True


class PagerSink:
    """
    Pipes output into a pager process.

    If the pager cannot be started, output falls back to standard output.
    """

    def __init__(
        self,
        command: Optional[Sequence[str]] = None,
        fallback: Optional[StdoutSink] = None,
    ):
        self.logger = get_logger("hilicat.streams.pager")
        self.command = tuple(command) if command else get_pager_command()
        self.fallback = fallback or StdoutSink()
        self.process: Optional[subprocess.Popen] = None
        self.closed = False
        self._start()

    def _fall_back(self, reason) -> None:
        self.logger.warning(
            f"Failed to start pager '{' '.join(self.command)}': {reason}; writing to stdout"
        )
        print(f"Error: Failed to start {self.command[0]}: {reason}", file=sys.stderr)
        self.process = None

    def _start(self) -> None:
        if not has_command(self.command[0]):
            self._fall_back("command not found")
            return
        try:
            self.process = subprocess.Popen(
                self.command,
                stdin=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
            self.logger.debug(f"Started pager: {' '.join(self.command)}")
        except OSError as e:
            self._fall_back(e)

    @property
    def using_fallback(self) -> bool:
        return self.process is None

    def write(self, text: str) -> bool:
        if self.process is None:
            self.closed = not self.fallback.write(text)
            return not self.closed
        if self.closed:
            return False
        try:
            self.process.stdin.write(text)
        except BrokenPipeError:
            self.logger.debug("Pager closed its input")
            self.closed = True
        return not self.closed

    def close(self) -> None:
        """Signal end of output and wait for the pager to exit."""
        if self.process is None:
            self.fallback.close()
            return
        try:
            self.process.stdin.close()
        except BrokenPipeError:
            self.logger.debug("Pager exited before end of output")
        self.process.wait()
        self.closed = True


def open_sink(use_pager: bool, command: Optional[Sequence[str]] = None):
    """Return a pager sink when ``use_pager`` is set, otherwise a stdout sink."""
    if use_pager:
        return PagerSink(command)
    return StdoutSink()


__all__ = ["PagerSink", "StdoutSink", "open_sink"]
