"""Input reading, the streaming pipeline and output sinks."""

from .pager import PagerSink, StdoutSink, open_sink
from .pipeline import HighlightPipeline
from .reader import ChunkReader, detect_line_ending, peek, resolve_line_ending

__all__ = [
    "ChunkReader",
    "HighlightPipeline",
    "PagerSink",
    "StdoutSink",
    "detect_line_ending",
    "open_sink",
    "peek",
    "resolve_line_ending",
]
