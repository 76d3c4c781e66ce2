# tests/conftest.py
"""
Pytest configuration for hilicat tests.

This module configures the test environment, including path setup
and shared language configurations.
"""

import json
import os
import sys

import pytest

# Add src directory to Python path
src_path = os.path.join(os.path.dirname(__file__), "..", "src")
sys.path.insert(0, src_path)

CYAN = "\033[36m"
GREEN = "\033[32m"
RED = "\033[31m"
RESET = "\033[0m"

SAMPLE_CONFIG = {
    "languages": {
        "go": {
            "extensions": ["go"],
            "rules": [
                {"name": "keywords", "pattern": r"\b(func|package)\b", "style": "keyword"},
                {"name": "strings", "pattern": r'"[^"]*"', "style": "string"},
            ],
            "styles": {"keyword": "cyan", "string": "green"},
        },
        "text": {"extensions": ["txt"], "rules": [], "styles": {}},
    }
}


@pytest.fixture(autouse=True)
def _isolate_environment(tmp_path, monkeypatch):
    """Keep configuration, cache and log state out of the real home directory."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg-config"))
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "xdg-cache"))
    monkeypatch.delenv("HILICAT_CONFIG", raising=False)
    monkeypatch.delenv("HILICAT_PAGER", raising=False)
    yield
    from hilicat.utils.logger import disable_debug_mode

    disable_debug_mode()


@pytest.fixture
def sample_config():
    """A HighlightConfig with a small go language and a rule-less text language."""
    from hilicat.settings.languages import HighlightConfig

    return HighlightConfig.from_dict(SAMPLE_CONFIG)


@pytest.fixture
def config_file(tmp_path):
    """The sample configuration written to disk."""
    path = tmp_path / "config.json"
    path.write_text(json.dumps(SAMPLE_CONFIG), encoding="utf-8")
    return path


@pytest.fixture
def make_highlighter(sample_config):
    """Factory building a Highlighter from the sample configuration."""
    from hilicat.highlighter.processor import LF, Highlighter, Options

    def _make(language="go", line_ending=LF, **options):
        return Highlighter.from_config(sample_config, language, line_ending, Options(**options))

    return _make
