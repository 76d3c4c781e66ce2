"""
Configuration constants and paths for hilicat.

This module provides application constants, the default location of the
language configuration file and the tunables of the streaming pipeline.
"""

import os
import shlex
from dataclasses import dataclass
from pathlib import Path
from typing import Tuple

from ..utils.platform import get_config_directory


class AppConstants:
    """Application metadata and identification constants."""

    APP_NAME = "hilicat"
    APP_TITLE = "hili-cat"
    APP_VERSION = "1.0.0"
    APP_VERSION_TUPLE = (1, 0, 0)

    LICENSE = "MIT"
    MIN_PYTHON_VERSION = (3, 10)


class StreamDefaults:
    """Defaults for reading and paging."""

    # Bytes per read from a file or standard input
    BUFFER_SIZE = 4096
    # Capacity of the queue between the reader and the highlighter
    QUEUE_SIZE = 1000
    # Bytes inspected to auto-detect the line ending
    DETECTION_SAMPLE_SIZE = 1024
    PAGER_COMMAND: Tuple[str, ...] = ("less", "-R")


APP_VERSION = AppConstants.APP_VERSION

CONFIG_ENV_VAR = "HILICAT_CONFIG"
PAGER_ENV_VAR = "HILICAT_PAGER"
CONFIG_FILE_NAME = "config.json"


@dataclass(frozen=True)
class ConfigPaths:
    """Resolved configuration locations."""

    config_dir: Path
    config_file: Path


def get_config_paths() -> ConfigPaths:
    """
    Resolve where the language configuration lives.

    ``$HILICAT_CONFIG`` wins; otherwise the file sits in the XDG config
    directory (``~/.config/hilicat/config.json``).
    """
    if override := os.environ.get(CONFIG_ENV_VAR):
        config_file = Path(override).expanduser()
        return ConfigPaths(config_dir=config_file.parent, config_file=config_file)

    config_dir = get_config_directory()
    return ConfigPaths(config_dir=config_dir, config_file=config_dir / CONFIG_FILE_NAME)


def get_pager_command() -> Tuple[str, ...]:
    """Pager command line, from ``$HILICAT_PAGER`` or the ``less -R`` default."""
    if override := os.environ.get(PAGER_ENV_VAR):
        parts = tuple(shlex.split(override))
        if parts:
            return parts
    return StreamDefaults.PAGER_COMMAND
