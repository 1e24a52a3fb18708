"""
Exception types and error handling for the reporter.

This module defines the error taxonomy used across the reporting pipeline
and a small helper for consistent, severity-driven error logging.
"""

import logging
from enum import Enum
from typing import Any, Optional, Union

logger = logging.getLogger(__name__)


class ErrorSeverity(Enum):
    """Severity levels for error handling."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ValidationError(Exception):
    """
    Exception raised when validation fails.

    This is the main exception type used by the configuration layer.
    """

    def __init__(self, message: str, field_name: Optional[str] = None,
                 value: Any = None, severity: ErrorSeverity = ErrorSeverity.ERROR):
        super().__init__(message)
        self.field_name = field_name
        self.value = value
        self.severity = severity


class ConfigurationError(ValidationError):
    """
    Raised at construction time when a setting cannot be used, e.g. a
    malformed include/exclude regex. Never raised once the loop is running.
    """


class ReporterError(Exception):
    """Base class for failures that can occur inside a report cycle."""


class CollectionError(ReporterError):
    """The upstream stats call failed; the whole cycle is abandoned."""


class ResolutionError(ReporterError):
    """
    A single index (or one of its shards) could not be resolved while
    building a snapshot. Only that index's shards are skipped.
    """

    def __init__(self, message: str, index: Optional[str] = None):
        super().__init__(message)
        self.index = index


class TransportError(ReporterError):
    """
    Connecting to or writing to the collector failed.

    Attributes:
        host: Collector host the batch was addressed to
        port: Collector port
        sent: Number of lines fully written before the failure
    """

    def __init__(self, message: str, host: str, port: int, sent: int = 0):
        super().__init__(message)
        self.host = host
        self.port = port
        self.sent = sent


def handle_error(
    error: Exception,
    context: str,
    severity: Union[ErrorSeverity, str] = ErrorSeverity.ERROR,
    reraise: bool = True,
    logger: Optional[logging.Logger] = None
) -> None:
    """
    Handle errors with consistent logging and optional re-raising.

    Args:
        error: The exception that occurred
        context: Context description of where the error occurred
        severity: Severity level for logging
        reraise: Whether to re-raise the exception after logging
        logger: Logger instance to use (defaults to module logger)
    """
    effective_logger = logger or globals()['logger']

    error_msg = f"Error in {context}: {error}"

    if isinstance(severity, str):
        severity_str = severity.lower()
    else:
        severity_str = severity.value

    if severity_str == "debug":
        effective_logger.debug(error_msg, exc_info=True)
    elif severity_str == "info":
        effective_logger.info(error_msg)
    elif severity_str == "warning":
        effective_logger.warning(error_msg)
    elif severity_str == "error":
        effective_logger.error(error_msg, exc_info=True)
    elif severity_str == "critical":
        effective_logger.critical(error_msg, exc_info=True)

    if reraise:
        raise error


def handle_config_error(error: Exception, context: str, **kwargs) -> None:
    """Handle configuration-related errors."""
    handle_error(error, f"config {context}", **kwargs)


def handle_cli_error(error: Exception, context: str, **kwargs) -> None:
    """Handle CLI-related errors and exit."""
    exit_code = kwargs.pop('exit_code', 1)

    severity = kwargs.pop('severity', ErrorSeverity.ERROR)
    handle_error(error, f"CLI {context}", severity=severity, reraise=False, **kwargs)

    import sys
    sys.exit(exit_code)
