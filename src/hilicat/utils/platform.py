# hilicat/utils/platform.py

import os
import shutil
from pathlib import Path
from typing import Dict, Optional

from .logger import get_logger


class PlatformInfo:
    """Information about the current platform (assumed to be Linux)."""

    def __init__(self):
        self.logger = get_logger("hilicat.platform")
        self.home_dir = Path.home()
        self.config_dir = self._get_config_directory()
        self.cache_dir = self._get_cache_directory()
        self._commands: Dict[str, Optional[str]] = {}

    def _get_config_directory(self) -> Path:
        """Get the configuration directory for Linux."""
        if xdg_config := os.environ.get("XDG_CONFIG_HOME"):
            return Path(xdg_config) / "hilicat"
        return self.home_dir / ".config" / "hilicat"

    def _get_cache_directory(self) -> Path:
        """Get the cache directory for Linux."""
        if xdg_cache := os.environ.get("XDG_CACHE_HOME"):
            return Path(xdg_cache) / "hilicat"
        return self.home_dir / ".cache" / "hilicat"

    def command_path(self, command: str) -> Optional[str]:
        """Resolve ``command`` on PATH; looked up once per instance."""
        if command not in self._commands:
            self._commands[command] = shutil.which(command)
            self.logger.debug(f"Command '{command}' resolved to {self._commands[command]}")
        return self._commands[command]

    def has_command(self, command: str) -> bool:
        """Check if a command is available."""
        return self.command_path(command) is not None


def get_platform_info() -> PlatformInfo:
    """Build platform information from the current environment."""
    return PlatformInfo()


def get_config_directory() -> Path:
    return get_platform_info().config_dir


def has_command(command: str) -> bool:
    return get_platform_info().has_command(command)
