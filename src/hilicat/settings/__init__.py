"""Configuration of hilicat: application constants and language definitions."""

from .config import AppConstants, StreamDefaults, get_config_paths, get_pager_command
from .languages import (
    HighlightConfig,
    HighlightRule,
    LanguageDefinition,
    default_config,
    detect_language,
    ensure_config_exists,
    load_config,
    save_config,
)

__all__ = [
    "AppConstants",
    "StreamDefaults",
    "get_config_paths",
    "get_pager_command",
    "HighlightConfig",
    "HighlightRule",
    "LanguageDefinition",
    "default_config",
    "detect_language",
    "ensure_config_exists",
    "load_config",
    "save_config",
]
