"""
Validation functions for configuration values.

Each validator returns the normalized value or raises ValidationError
naming the offending field.
"""

import re
from typing import Any, Optional, Pattern

from .exceptions import ConfigurationError, ValidationError

# Suffix -> seconds multiplier for duration strings such as "30s" or "1m".
_DURATION_UNITS = {
    "ms": 0.001,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
    "d": 86400.0,
}

_DURATION_RE = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*(ms|s|m|h|d)?\s*$", re.IGNORECASE)


def validate_positive_integer(
    value: Any,
    min_value: int = 1,
    max_value: Optional[int] = None,
    field_name: str = "value"
) -> int:
    """
    Validate that a value is a positive integer.

    Args:
        value: Value to validate
        min_value: Minimum allowed value (inclusive)
        max_value: Maximum allowed value (inclusive), None for no limit
        field_name: Name of the field being validated

    Returns:
        Validated integer value

    Raises:
        ValidationError: If validation fails
    """
    if isinstance(value, bool):
        raise ValidationError(
            f"{field_name} must be a valid integer, got {value}",
            field_name=field_name,
            value=value
        )
    try:
        int_value = int(value)
    except (ValueError, TypeError):
        raise ValidationError(
            f"{field_name} must be a valid integer, got {value}",
            field_name=field_name,
            value=value
        )
    if int_value < min_value:
        raise ValidationError(
            f"{field_name} must be >= {min_value}, got {int_value}",
            field_name=field_name,
            value=value
        )
    if max_value is not None and int_value > max_value:
        raise ValidationError(
            f"{field_name} must be <= {max_value}, got {int_value}",
            field_name=field_name,
            value=value
        )
    return int_value


def validate_port(value: Any, field_name: str = "port") -> int:
    """Validate a TCP port number (1-65535)."""
    return validate_positive_integer(value, min_value=1, max_value=65535, field_name=field_name)


def validate_duration(
    value: Any,
    min_seconds: float = 0.001,
    field_name: str = "duration"
) -> float:
    """
    Parse and validate a duration.

    Accepts a number of seconds or a string with an optional unit suffix
    (``ms``, ``s``, ``m``, ``h``, ``d``), e.g. ``"500ms"``, ``"30s"``,
    ``"1m"``. A bare string number is read as seconds.

    Args:
        value: Raw duration value
        min_seconds: Minimum allowed duration in seconds (inclusive)
        field_name: Name of the field being validated

    Returns:
        Duration in seconds as a float

    Raises:
        ValidationError: If the value cannot be parsed or is too small
    """
    if isinstance(value, bool):
        raise ValidationError(
            f"{field_name} must be a duration such as '30s' or '1m', got {value}",
            field_name=field_name,
            value=value
        )

    if isinstance(value, (int, float)):
        seconds = float(value)
    elif isinstance(value, str):
        match = _DURATION_RE.match(value)
        if not match:
            raise ValidationError(
                f"{field_name} must be a duration such as '30s' or '1m', got '{value}'",
                field_name=field_name,
                value=value
            )
        amount, unit = match.groups()
        seconds = float(amount) * _DURATION_UNITS[(unit or "s").lower()]
    else:
        raise ValidationError(
            f"{field_name} must be a duration such as '30s' or '1m', got {value!r}",
            field_name=field_name,
            value=value
        )

    if seconds < min_seconds:
        raise ValidationError(
            f"{field_name} must be >= {min_seconds}s, got {seconds}s",
            field_name=field_name,
            value=value
        )
    return seconds


def validate_optional_string(value: Any, field_name: str = "value") -> Optional[str]:
    """
    Validate an optional string setting.

    Returns None for a missing value and the stripped string otherwise;
    a string that is empty after stripping is returned as ``""``.
    """
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(
            f"{field_name} must be a string, got {value!r}",
            field_name=field_name,
            value=value
        )
    return value.strip()


def validate_regex_pattern(pattern: str, field_name: str = "regex_pattern") -> str:
    """
    Validate regex pattern format.

    Args:
        pattern: Regex pattern to validate
        field_name: Name of the field being validated

    Returns:
        Validated pattern

    Raises:
        ConfigurationError: If pattern is invalid
    """
    compile_regex_pattern(pattern, field_name=field_name)
    return pattern


def compile_regex_pattern(pattern: str, field_name: str = "regex_pattern") -> Pattern[str]:
    """
    Compile a regex pattern, turning failures into ConfigurationError.

    Args:
        pattern: Regex pattern to compile
        field_name: Name of the field being validated

    Returns:
        The compiled pattern

    Raises:
        ConfigurationError: If pattern is empty, not a string or malformed
    """
    if not pattern or not isinstance(pattern, str):
        raise ConfigurationError(
            f"{field_name} must be a non-empty string",
            field_name=field_name,
            value=pattern
        )

    try:
        return re.compile(pattern)
    except re.error as e:
        raise ConfigurationError(
            f"{field_name} is not a valid regex pattern: {e}",
            field_name=field_name,
            value=pattern
        )
