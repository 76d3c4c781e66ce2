# hilicat/streams/reader.py
"""
Reading raw input in chunks and detecting its line ending.
"""

import sys
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Iterator, Union

from ..highlighter.processor import CRLF, LF
from ..settings.config import StreamDefaults
from ..utils.exceptions import InputReadError, StreamReadError
from ..utils.logger import get_logger

STDIN_NAMES = ("", "-")

LINE_ENDING_MODES = {
    "lf": LF,
    "crlf": CRLF,
}


def detect_line_ending(data: bytes) -> str:
    """Return CRLF if ``data`` contains a ``\\r\\n`` pair, else LF (also for empty data)."""
    if b"\r\n" in data:
        return CRLF
    return LF


def resolve_line_ending(mode: str, sample: bytes = b"") -> str:
    """
    Turn a ``--line-ending`` value into the line ending string.

    Args:
        mode: "auto", "lf" or "crlf" (case-insensitive).
        sample: Leading bytes of the input, used by "auto".

    Raises:
        ValueError: For an unknown mode.
    """
    mode = mode.lower()
    if mode == "auto":
        return detect_line_ending(sample)
    try:
        return LINE_ENDING_MODES[mode]
    except KeyError:
        raise ValueError(f"unknown line ending mode: {mode}") from None


def peek(stream: BinaryIO, size: int = StreamDefaults.DETECTION_SAMPLE_SIZE) -> bytes:
    """
    Look at the first bytes of ``stream`` without consuming them.

    Streams without ``peek`` support yield an empty sample.
    """
    peek_fn = getattr(stream, "peek", None)
    if peek_fn is None:
        return b""
    try:
        return peek_fn(size)[:size]
    except OSError:
        return b""


class ChunkReader:
    """Reads a file or standard input in fixed-size chunks."""

    def __init__(self, buffer_size: int = StreamDefaults.BUFFER_SIZE):
        self.logger = get_logger("hilicat.streams.reader")
        self.buffer_size = buffer_size if buffer_size > 0 else StreamDefaults.BUFFER_SIZE

    @staticmethod
    def is_stdin(path: Union[str, Path, None]) -> bool:
        return path is None or str(path) in STDIN_NAMES

    @contextmanager
    def open_source(self, path: Union[str, Path, None]) -> Iterator[BinaryIO]:
        """
        Open ``path`` for binary reading; "" or "-" means standard input.

        Standard input is never closed by this context manager.

        Raises:
            InputReadError: If the file cannot be opened.
        """
        if self.is_stdin(path):
            yield sys.stdin.buffer
            return

        try:
            stream = open(path, "rb")
        except OSError as e:
            raise InputReadError(str(path), e.strerror or str(e)) from e

        with stream:
            yield stream

    def iter_chunks(self, stream: BinaryIO, name: str = "stdin") -> Iterator[bytes]:
        """
        Yield chunks of at most ``buffer_size`` bytes until end of input.

        Chunks read before a failure have already been yielded, so a read
        error only ends the stream early.

        Raises:
            StreamReadError: If a read fails part way through.
        """
        read = getattr(stream, "read1", None) or stream.read
        while True:
            try:
                data = read(self.buffer_size)
            except OSError as e:
                self.logger.warning(f"Error reading {name}: {e}")
                raise StreamReadError(name, e.strerror or str(e)) from e
            if not data:
                return
            yield data


__all__ = [
    "ChunkReader",
    "LINE_ENDING_MODES",
    "detect_line_ending",
    "peek",
    "resolve_line_ending",
]
