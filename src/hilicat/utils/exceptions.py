"""
Custom exceptions for hilicat.

This module defines the exception hierarchy used by the highlighting engine,
the configuration layer and the stream drivers, so that callers can decide
which failures are fatal for a single input and which abort the whole run.
"""

from typing import Optional, Dict, Any
from enum import Enum


class ErrorSeverity(Enum):
    """Error severity levels."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    """Error categories for classification."""
    CONFIG = "config"
    HIGHLIGHT = "highlight"
    STREAM = "stream"
    SYSTEM = "system"


class HiliCatError(Exception):
    """Base exception class for all hilicat errors."""

    def __init__(self,
                 message: str,
                 category: ErrorCategory = ErrorCategory.SYSTEM,
                 severity: ErrorSeverity = ErrorSeverity.MEDIUM,
                 details: Optional[Dict[str, Any]] = None,
                 user_message: Optional[str] = None):
        """
        Initialize base exception.

        Args:
            message: Technical error message for logging
            category: Error category for classification
            severity: Error severity level
            details: Additional details for debugging
            user_message: User-friendly message for display
        """
        super().__init__(message)
        self.message = message
        self.category = category
        self.severity = severity
        self.details = details or {}
        self.user_message = user_message or self._generate_user_message()

    def _generate_user_message(self) -> str:
        """Generate a user-friendly message based on the category."""
        category_messages = {
            ErrorCategory.CONFIG: "A configuration error occurred",
            ErrorCategory.HIGHLIGHT: "A highlighting error occurred",
            ErrorCategory.STREAM: "An input/output error occurred",
            ErrorCategory.SYSTEM: "A system error occurred",
        }
        return category_messages.get(self.category, "An unexpected error occurred")

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging."""
        return {
            'type': self.__class__.__name__,
            'message': self.message,
            'category': self.category.value,
            'severity': self.severity.value,
            'details': self.details,
            'user_message': self.user_message
        }

    def __str__(self) -> str:
        return f"[{self.category.value.upper()}:{self.severity.value.upper()}] {self.message}"


# Configuration-related exceptions
class ConfigError(HiliCatError):
    """Base class for configuration-related errors."""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault('category', ErrorCategory.CONFIG)
        super().__init__(message, **kwargs)


class ConfigLoadError(ConfigError):
    """Raised when the configuration file cannot be opened or read."""

    def __init__(self, file_path: str, reason: str, **kwargs):
        message = f"failed to open config file {file_path}: {reason}"
        kwargs.setdefault('severity', ErrorSeverity.HIGH)
        kwargs.setdefault('details', {'file_path': file_path, 'reason': reason})
        kwargs.setdefault('user_message', f"Could not read configuration file {file_path}")
        super().__init__(message, **kwargs)


class ConfigParseError(ConfigError):
    """Raised when the configuration file is not valid JSON or has a wrong shape."""

    def __init__(self, file_path: str, reason: str, **kwargs):
        message = f"failed to parse config file {file_path}: {reason}"
        kwargs.setdefault('severity', ErrorSeverity.HIGH)
        kwargs.setdefault('details', {'file_path': file_path, 'reason': reason})
        kwargs.setdefault('user_message', f"Configuration file {file_path} is malformed")
        super().__init__(message, **kwargs)


class ConfigWriteError(ConfigError):
    """Raised when the default configuration file cannot be created."""

    def __init__(self, file_path: str, reason: str, **kwargs):
        message = f"failed to create config file {file_path}: {reason}"
        kwargs.setdefault('severity', ErrorSeverity.LOW)
        kwargs.setdefault('details', {'file_path': file_path, 'reason': reason})
        super().__init__(message, **kwargs)


class LanguageNotFoundError(ConfigError):
    """Raised when a highlighter is requested for a language the config lacks."""

    def __init__(self, language: str, **kwargs):
        message = f"language not found: {language}"
        kwargs.setdefault('severity', ErrorSeverity.HIGH)
        kwargs.setdefault('details', {'language': language})
        kwargs.setdefault('user_message', f"No highlighting rules for language '{language}'")
        super().__init__(message, **kwargs)
        self.language = language


# Highlighting-related exceptions
class HighlightError(HiliCatError):
    """Base class for highlighting engine errors."""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault('category', ErrorCategory.HIGHLIGHT)
        super().__init__(message, **kwargs)


class PatternCompilationError(HighlightError):
    """Raised when a rule's regular expression does not compile."""

    def __init__(self, rule_name: str, pattern: str, reason: str, **kwargs):
        message = f"invalid regex pattern for {rule_name}: {reason}"
        kwargs.setdefault('severity', ErrorSeverity.HIGH)
        kwargs.setdefault('details', {'rule_name': rule_name, 'pattern': pattern, 'reason': reason})
        kwargs.setdefault('user_message', f"Rule '{rule_name}' has an invalid pattern")
        super().__init__(message, **kwargs)
        self.rule_name = rule_name
        self.pattern = pattern


# Stream-related exceptions
class StreamError(HiliCatError):
    """Base class for input/output errors."""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault('category', ErrorCategory.STREAM)
        super().__init__(message, **kwargs)


class InputReadError(StreamError):
    """Raised when an input file cannot be opened."""

    def __init__(self, file_path: str, reason: str, **kwargs):
        message = f"failed to open file {file_path}: {reason}"
        kwargs.setdefault('severity', ErrorSeverity.MEDIUM)
        kwargs.setdefault('details', {'file_path': file_path, 'reason': reason})
        kwargs.setdefault('user_message', f"Could not read {file_path}")
        super().__init__(message, **kwargs)


class StreamReadError(StreamError):
    """Raised when reading an already opened input fails part way."""

    def __init__(self, source: str, reason: str, **kwargs):
        message = f"failed to read {source}: {reason}"
        kwargs.setdefault('severity', ErrorSeverity.MEDIUM)
        kwargs.setdefault('details', {'source': source, 'reason': reason})
        kwargs.setdefault('user_message', f"Input {source} ended early")
        super().__init__(message, **kwargs)


# Exception utilities
def handle_exception(exception: Exception,
                     context: str = "",
                     logger_name: str = None,
                     reraise: bool = False) -> Optional[HiliCatError]:
    """
    Handle an exception by logging it and optionally converting to HiliCatError.

    Args:
        exception: Exception to handle
        context: Context where the exception occurred
        logger_name: Logger name to use
        reraise: Whether to re-raise the exception

    Returns:
        HiliCatError if conversion was done, None otherwise
    """
    from .logger import log_error_with_context

    log_error_with_context(exception, context, logger_name)

    if isinstance(exception, HiliCatError):
        converted_exception = exception
    else:
        converted_exception = HiliCatError(
            message=str(exception),
            details={'original_type': type(exception).__name__, 'context': context}
        )

    if reraise:
        raise converted_exception

    return converted_exception
