"""
Validation and error handling for the graphite_reporter package.

This module provides the error taxonomy of the reporting pipeline, input
validation for configuration values and consistent error reporting.
"""

from .exceptions import (
    ErrorSeverity,
    ValidationError,
    ConfigurationError,
    ReporterError,
    CollectionError,
    ResolutionError,
    TransportError,
    handle_error,
    handle_config_error,
    handle_cli_error,
)

from .validators import (
    compile_regex_pattern,
    validate_duration,
    validate_optional_string,
    validate_port,
    validate_positive_integer,
    validate_regex_pattern,
)

__all__ = [
    # Errors
    "ErrorSeverity",
    "ValidationError",
    "ConfigurationError",
    "ReporterError",
    "CollectionError",
    "ResolutionError",
    "TransportError",
    "handle_error",
    "handle_config_error",
    "handle_cli_error",
    # Validators
    "compile_regex_pattern",
    "validate_duration",
    "validate_optional_string",
    "validate_port",
    "validate_positive_integer",
    "validate_regex_pattern",
]
