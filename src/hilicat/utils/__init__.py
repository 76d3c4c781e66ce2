"""
Utility modules for hilicat.

This package provides the logging system, the exception hierarchy, platform
helpers and translation support shared by the engine and the CLI.
"""

from .translation_utils import _
from .logger import get_logger
from .platform import get_platform_info
from .exceptions import (
    HiliCatError, ConfigError, HighlightError, StreamError, handle_exception
)

__all__ = [
    "_",
    "get_logger",
    "get_platform_info",
    "HiliCatError",
    "ConfigError",
    "HighlightError",
    "StreamError",
    "handle_exception",
]
