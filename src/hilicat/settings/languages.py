# hilicat/settings/languages.py
"""
Language definitions for the highlighter.

The configuration file is JSON shaped like:

    {
        "languages": {
            "go": {
                "extensions": ["go"],
                "rules": [
                    {"name": "keywords", "pattern": "\\\\b(func|package)\\\\b", "style": "keyword"}
                ],
                "styles": {"keyword": "cyan"}
            }
        }
    }

Rules keep their declaration order; it decides which rule wins when two
rules match overlapping text. Style names are resolved against the
language's ``styles`` mapping and then against the style registry.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Union

from ..utils.exceptions import (
    ConfigLoadError,
    ConfigParseError,
    ConfigWriteError,
    LanguageNotFoundError,
)
from ..utils.logger import get_logger

logger = get_logger("hilicat.settings.languages")


def _require_type(value: Any, expected: type, where: str) -> Any:
    if not isinstance(value, expected):
        raise ValueError(
            f"{where} must be {expected.__name__}, got {type(value).__name__}"
        )
    return value


@dataclass(slots=True, frozen=True)
class HighlightRule:
    """
    A named (pattern, style) pair.

    ``style`` is a style name, e.g. "keyword", resolved through the owning
    language's ``styles`` mapping.
    """

    name: str
    pattern: str
    style: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert rule to dictionary for JSON serialization."""
        return {"name": self.name, "pattern": self.pattern, "style": self.style}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HighlightRule":
        """
        Create rule from dictionary.

        Expected JSON format:
        {
            "name": "rule_name",
            "pattern": "regex_pattern",
            "style": "style_name"
        }
        """
        _require_type(data, dict, "rule")
        name = _require_type(data.get("name", ""), str, "rule name")
        pattern = _require_type(data.get("pattern", ""), str, f"pattern of rule '{name}'")
        style = _require_type(data.get("style", ""), str, f"style of rule '{name}'")
        return cls(name=name, pattern=pattern, style=style)


@dataclass(slots=True)
class LanguageDefinition:
    """The ordered rules and style bindings for one language."""

    name: str
    extensions: List[str] = field(default_factory=list)
    rules: List[HighlightRule] = field(default_factory=list)
    styles: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "extensions": list(self.extensions),
            "rules": [rule.to_dict() for rule in self.rules],
            "styles": dict(self.styles),
        }

    @classmethod
    def from_dict(cls, name: str, data: Dict[str, Any]) -> "LanguageDefinition":
        _require_type(data, dict, f"language '{name}'")
        extensions = _require_type(
            data.get("extensions", []), list, f"extensions of '{name}'"
        )
        rules = _require_type(data.get("rules", []), list, f"rules of '{name}'")
        styles = _require_type(data.get("styles", {}), dict, f"styles of '{name}'")
        for key, value in styles.items():
            _require_type(value, str, f"style '{key}' of '{name}'")

        return cls(
            name=name,
            extensions=[str(ext) for ext in extensions],
            rules=[HighlightRule.from_dict(rule) for rule in rules],
            styles=dict(styles),
        )


@dataclass(slots=True)
class HighlightConfig:
    """All language definitions, keyed by language identifier."""

    languages: Dict[str, LanguageDefinition] = field(default_factory=dict)

    def get_language(self, language: str) -> LanguageDefinition:
        """
        Look up a language definition.

        Raises:
            LanguageNotFoundError: If the identifier is not configured.
        """
        try:
            return self.languages[language]
        except KeyError:
            raise LanguageNotFoundError(language) from None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "languages": {
                name: language.to_dict() for name, language in self.languages.items()
            }
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HighlightConfig":
        _require_type(data, dict, "configuration")
        languages = _require_type(data.get("languages", {}), dict, "languages")
        return cls(
            languages={
                name: LanguageDefinition.from_dict(name, language)
                for name, language in languages.items()
            }
        )


def default_config() -> HighlightConfig:
    """Build the configuration written when no config file exists yet."""
    return HighlightConfig.from_dict(
        {
            "languages": {
                "go": {
                    "extensions": ["go"],
                    "rules": [
                        {
                            "name": "keywords",
                            "pattern": r"\b(func|package|import|var|const|type|struct|interface|map|chan|go|defer|if|else|switch|case|for|range|return|break|continue)\b",
                            "style": "keyword",
                        },
                        {"name": "strings", "pattern": r'"[^"]*"', "style": "string"},
                        {
                            "name": "comments",
                            "pattern": r"//.*|/\*[\s\S]*?\*/",
                            "style": "comment",
                        },
                        {"name": "numbers", "pattern": r"\b\d+\b", "style": "number"},
                    ],
                    "styles": {
                        "keyword": "cyan",
                        "string": "green",
                        "comment": "yellow",
                        "number": "magenta",
                    },
                },
                "json": {
                    "extensions": ["json"],
                    "rules": [
                        {"name": "keys", "pattern": r'"[^"]*"\s*:', "style": "key"},
                        {"name": "strings", "pattern": r':\s*"[^"]*"', "style": "string"},
                        {"name": "numbers", "pattern": r":\s*\d+", "style": "number"},
                        {
                            "name": "booleans",
                            "pattern": r":\s*(true|false|null)",
                            "style": "boolean",
                        },
                    ],
                    "styles": {
                        "key": "cyan",
                        "string": "green",
                        "number": "magenta",
                        "boolean": "yellow",
                    },
                },
            }
        }
    )


def load_config(config_path: Union[str, Path]) -> HighlightConfig:
    """
    Load the highlighting configuration from a JSON file.

    Raises:
        ConfigLoadError: If the file cannot be opened or read.
        ConfigParseError: If the content is not valid JSON or has a wrong shape.
    """
    path = Path(config_path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigParseError(str(path), str(e)) from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigLoadError(str(path), str(e)) from e

    try:
        config = HighlightConfig.from_dict(data)
    except ValueError as e:
        raise ConfigParseError(str(path), str(e)) from e

    logger.debug(f"Loaded {len(config.languages)} languages from {path}")
    return config


def save_config(config: HighlightConfig, config_path: Union[str, Path]) -> None:
    """
    Write ``config`` as indented JSON, creating parent directories.

    Raises:
        ConfigWriteError: If the directory or file cannot be written.
    """
    path = Path(config_path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(config.to_dict(), f, indent=2)
            f.write("\n")
    except OSError as e:
        raise ConfigWriteError(str(path), str(e)) from e


def ensure_config_exists(config_path: Union[str, Path]) -> bool:
    """
    Create a default config file if it doesn't exist.

    Returns:
        True if a new file was written, False if one was already there.

    Raises:
        ConfigWriteError: If the default file cannot be created.
    """
    path = Path(config_path)
    if path.exists():
        return False
    save_config(default_config(), path)
    logger.info(f"Created default configuration at {path}")
    return True


def detect_language(config: HighlightConfig, file_name: Union[str, Path]) -> str:
    """
    Determine the language of a file from its extension.

    Returns:
        The language identifier, or "" when no language claims the extension.
    """
    ext = Path(file_name).suffix.lower()
    if not ext:
        return ""
    ext = ext[1:]

    for name, language in config.languages.items():
        if any(supported.lower().lstrip(".") == ext for supported in language.extensions):
            return name

    return ""


__all__ = [
    "HighlightConfig",
    "HighlightRule",
    "LanguageDefinition",
    "default_config",
    "detect_language",
    "ensure_config_exists",
    "load_config",
    "save_config",
]
