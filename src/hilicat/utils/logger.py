"""
Structured logging system for hilicat.

Console output goes to stderr so that it never interleaves with the
highlighted text written to stdout. File logging is off by default and the
log directory is only created once it is enabled.
"""

import logging
import logging.handlers
import os
import sys
import threading
from datetime import datetime
from pathlib import Path
from typing import Optional, Dict, Any, Union
from enum import Enum


class LogLevel(Enum):
    """Log levels for the application."""
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL


class LoggerConfig:
    """
    Configuration for the logging system.

    Directory creation is deferred until file logging is actually enabled.
    """

    def __init__(self):
        self._log_dir: Optional[Path] = None
        self.max_file_size = 10 * 1024 * 1024  # 10MB
        self.backup_count = 5
        self.log_to_file = os.environ.get('HILICAT_LOG_FILE', '').lower() in ('1', 'true', 'yes')
        self.console_level = LogLevel.WARNING
        self.file_level = LogLevel.DEBUG
        self.error_file_level = LogLevel.ERROR

    @property
    def log_dir(self) -> Path:
        """Get log directory, creating it if necessary."""
        if self._log_dir is None:
            if xdg_cache := os.environ.get('XDG_CACHE_HOME'):
                self._log_dir = Path(xdg_cache) / "hilicat" / "logs"
            else:
                self._log_dir = Path.home() / ".cache" / "hilicat" / "logs"
            self._log_dir.mkdir(parents=True, exist_ok=True)
        return self._log_dir

    @property
    def main_log_file(self) -> Path:
        return self.log_dir / "hilicat.log"

    @property
    def error_log_file(self) -> Path:
        return self.log_dir / "hilicat_errors.log"


class ColoredFormatter(logging.Formatter):
    """Colored formatter for console output."""

    COLORS = {
        'DEBUG': '\033[36m',     # Cyan
        'INFO': '\033[32m',      # Green
        'WARNING': '\033[33m',   # Yellow
        'ERROR': '\033[31m',     # Red
        'CRITICAL': '\033[35m',  # Magenta
        'RESET': '\033[0m'       # Reset
    }

    def format(self, record):
        levelname = record.levelname
        if levelname in self.COLORS:
            record.levelname = f"{self.COLORS[levelname]}{levelname}{self.COLORS['RESET']}"

        formatted = super().format(record)

        # Reset levelname for other handlers
        record.levelname = levelname

        return formatted


class StderrHandler(logging.StreamHandler):
    """Stream handler that always writes to the current ``sys.stderr``."""

    def __init__(self, level=logging.NOTSET):
        logging.Handler.__init__(self, level)

    @property
    def stream(self):
        return sys.stderr


class ThreadSafeLogger:
    """Thread-safe logger implementation."""

    def __init__(self, name: str, config: LoggerConfig):
        self.name = name
        self.config = config
        self._logger = logging.getLogger(name)
        self._lock = threading.Lock()
        self._setup_logger()

    def _setup_logger(self):
        """Set up the logger with handlers and formatters based on current config."""
        with self._lock:
            if self._logger.hasHandlers():
                self._logger.handlers.clear()

            # Messages must not be handled twice by the root logger.
            self._logger.propagate = False
            self._logger.setLevel(logging.DEBUG)

            console_handler = StderrHandler()
            console_handler.setLevel(self.config.console_level.value)
            console_handler.setFormatter(ColoredFormatter(
                fmt='%(asctime)s | %(name)s | %(levelname)s | %(message)s',
                datefmt='%H:%M:%S'
            ))
            self._logger.addHandler(console_handler)

            if self.config.log_to_file:
                file_formatter = logging.Formatter(
                    fmt='%(asctime)s | %(name)s | %(levelname)-8s | %(funcName)s:%(lineno)d | %(message)s',
                    datefmt='%Y-%m-%d %H:%M:%S'
                )

                main_file_handler = logging.handlers.RotatingFileHandler(
                    self.config.main_log_file,
                    maxBytes=self.config.max_file_size,
                    backupCount=self.config.backup_count,
                    encoding='utf-8'
                )
                main_file_handler.setLevel(self.config.file_level.value)
                main_file_handler.setFormatter(file_formatter)
                self._logger.addHandler(main_file_handler)

                error_file_handler = logging.handlers.RotatingFileHandler(
                    self.config.error_log_file,
                    maxBytes=self.config.max_file_size,
                    backupCount=self.config.backup_count,
                    encoding='utf-8'
                )
                error_file_handler.setLevel(self.config.error_file_level.value)
                error_file_handler.setFormatter(file_formatter)
                self._logger.addHandler(error_file_handler)

    def debug(self, message: str, **kwargs):
        self._logger.debug(message, **kwargs)

    def info(self, message: str, **kwargs):
        self._logger.info(message, **kwargs)

    def warning(self, message: str, **kwargs):
        self._logger.warning(message, **kwargs)

    def error(self, message: str, exc_info: bool = False, **kwargs):
        self._logger.error(message, exc_info=exc_info, **kwargs)

    def critical(self, message: str, exc_info: bool = True, **kwargs):
        self._logger.critical(message, exc_info=exc_info, **kwargs)

    def exception(self, message: str, **kwargs):
        self._logger.exception(message, **kwargs)


class LoggerManager:
    """Centralized logger manager."""

    _instance: Optional['LoggerManager'] = None
    _lock = threading.RLock()

    def __new__(cls) -> 'LoggerManager':
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if hasattr(self, '_initialized'):
            return
        self._initialized = True
        self.config = LoggerConfig()
        self._loggers: Dict[str, ThreadSafeLogger] = {}

    def get_logger(self, name: str) -> ThreadSafeLogger:
        """
        Get or create a logger with the given name.

        Args:
            name: Logger name (usually module name)

        Returns:
            ThreadSafeLogger instance
        """
        if name not in self._loggers:
            with self._lock:
                if name not in self._loggers:
                    self._loggers[name] = ThreadSafeLogger(name, self.config)
        return self._loggers[name]

    def reconfigure_all_loggers(self):
        """Re-applies configuration to all existing logger instances."""
        with self._lock:
            for logger in self._loggers.values():
                logger._setup_logger()

    def set_console_level(self, level: LogLevel):
        with self._lock:
            self.config.console_level = level
            self.reconfigure_all_loggers()

    def enable_debug_mode(self):
        self.set_console_level(LogLevel.DEBUG)
        os.environ['HILICAT_DEBUG'] = '1'

    def disable_debug_mode(self):
        self.set_console_level(LogLevel.WARNING)
        os.environ.pop('HILICAT_DEBUG', None)

    def cleanup_old_logs(self, days_to_keep: int = 30):
        """Remove rotated log files older than ``days_to_keep`` days."""
        if not self.config.log_to_file:
            return
        try:
            cutoff_time = datetime.now().timestamp() - (days_to_keep * 24 * 60 * 60)
            for log_file in self.config.log_dir.glob("*.log*"):
                if log_file.stat().st_mtime < cutoff_time:
                    log_file.unlink()
        except OSError as e:
            print(f"Error cleaning up old logs: {e}", file=sys.stderr)

    def get_log_info(self) -> Dict[str, Any]:
        """
        Get information about current logging setup.

        Returns:
            Dictionary with logging information
        """
        return {
            'log_to_file': self.config.log_to_file,
            'console_level': self.config.console_level.name,
            'file_level': self.config.file_level.name,
            'debug_enabled': os.environ.get('HILICAT_DEBUG', '').lower() in ('1', 'true', 'yes'),
            'active_loggers': list(self._loggers.keys())
        }


# Global logger manager instance
_logger_manager = LoggerManager()


def get_logger(name: str = None) -> ThreadSafeLogger:
    """
    Get a logger instance.

    Args:
        name: Logger name (defaults to calling module)

    Returns:
        ThreadSafeLogger instance
    """
    if name is None:
        import inspect
        frame = inspect.currentframe()
        try:
            name = frame.f_back.f_globals.get('__name__', 'unknown')
        finally:
            del frame
    return _logger_manager.get_logger(name)


def set_console_log_level(level: Union[LogLevel, str]):
    """
    Set console logging level globally.

    Args:
        level: LogLevel enum or string ('DEBUG', 'INFO', etc.)

    Raises:
        KeyError: If the string does not name a level
    """
    if isinstance(level, str):
        level = LogLevel[level.upper()]
    _logger_manager.set_console_level(level)


def enable_debug_mode():
    """Enable debug mode for all loggers."""
    _logger_manager.enable_debug_mode()


def disable_debug_mode():
    """Disable debug mode for all loggers."""
    _logger_manager.disable_debug_mode()


def cleanup_old_logs(days_to_keep: int = 30):
    """Clean up old log files."""
    _logger_manager.cleanup_old_logs(days_to_keep)


def get_log_info() -> Dict[str, Any]:
    """Get logging system information."""
    return _logger_manager.get_log_info()


def log_app_start():
    """Log application startup."""
    logger = get_logger('hilicat.startup')
    logger.debug("hilicat starting up")
    cleanup_old_logs()


def log_error_with_context(error: Exception, context: str, logger_name: str = None):
    """Log an error with context information."""
    logger = get_logger(logger_name or 'hilicat')
    logger.error(f"Error in {context}: {str(error)}", exc_info=True)
