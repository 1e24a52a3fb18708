"""
Configuration validation utilities.

This module turns the raw `[cluster]` and `[metrics.graphite]` tables into
validated configuration dataclasses.
"""

import logging
from typing import Any, Dict

from ..models.config import (
    DEFAULT_CLUSTER_NAME,
    DEFAULT_GRAPHITE_PORT,
    DEFAULT_INTERVAL_SECONDS,
    DEFAULT_SHUTDOWN_TIMEOUT_SECONDS,
    DEFAULT_TIMEOUT_SECONDS,
    GraphiteConfig,
)
from ..validation import (
    ValidationError,
    validate_duration,
    validate_optional_string,
    validate_port,
    validate_regex_pattern,
)

logger = logging.getLogger(__name__)


def validate_cluster_name(cluster_data: Dict[str, Any]) -> str:
    """
    Validate the `[cluster]` table and return the cluster name.

    Raises:
        ValidationError: If the name is not a non-empty string
    """
    name = validate_optional_string(cluster_data.get("name"), field_name="cluster.name")
    if name is None:
        return DEFAULT_CLUSTER_NAME
    if not name:
        raise ValidationError("cluster.name must be a non-empty string",
                              field_name="cluster.name", value=name)
    return name


def validate_graphite_config(graphite_data: Dict[str, Any],
                             cluster_name: str = DEFAULT_CLUSTER_NAME) -> GraphiteConfig:
    """
    Validate and create a GraphiteConfig from raw configuration data.

    Args:
        graphite_data: Raw `[metrics.graphite]` table from TOML
        cluster_name: Name of the cluster, for the default prefix

    Returns:
        Validated GraphiteConfig instance

    Raises:
        ValidationError: If a value is out of range or of the wrong type
        ConfigurationError: If the include/exclude pattern is malformed
    """
    try:
        host = validate_optional_string(graphite_data.get("host"), field_name="metrics.graphite.host") or ""

        port = validate_port(
            graphite_data.get("port", DEFAULT_GRAPHITE_PORT),
            field_name="metrics.graphite.port",
        )

        interval_seconds = validate_duration(
            graphite_data.get("every", DEFAULT_INTERVAL_SECONDS),
            min_seconds=0.001,  # 1ms minimum
            field_name="metrics.graphite.every",
        )

        timeout_seconds = validate_duration(
            graphite_data.get("timeout", DEFAULT_TIMEOUT_SECONDS),
            min_seconds=0.001,
            field_name="metrics.graphite.timeout",
        )

        shutdown_timeout_seconds = validate_duration(
            graphite_data.get("shutdown_timeout", DEFAULT_SHUTDOWN_TIMEOUT_SECONDS),
            min_seconds=0.001,
            field_name="metrics.graphite.shutdown_timeout",
        )

        prefix = validate_optional_string(graphite_data.get("prefix"), field_name="metrics.graphite.prefix")
        if prefix is not None:
            prefix = prefix.strip(".")
            if not prefix:
                raise ValidationError(
                    "metrics.graphite.prefix must not be empty",
                    field_name="metrics.graphite.prefix",
                    value=graphite_data.get("prefix"),
                )
            if any(ch.isspace() for ch in prefix):
                raise ValidationError(
                    f"metrics.graphite.prefix must not contain whitespace: '{prefix}'",
                    field_name="metrics.graphite.prefix",
                    value=prefix,
                )

        include_pattern = validate_optional_string(
            graphite_data.get("include"), field_name="metrics.graphite.include"
        ) or None
        if include_pattern is not None:
            validate_regex_pattern(include_pattern, field_name="metrics.graphite.include")

        exclude_pattern = validate_optional_string(
            graphite_data.get("exclude"), field_name="metrics.graphite.exclude"
        ) or None
        if exclude_pattern is not None:
            validate_regex_pattern(exclude_pattern, field_name="metrics.graphite.exclude")

        if not host:
            logger.warning("metrics.graphite.host is not set, Graphite reporting will be disabled")

        return GraphiteConfig(
            cluster_name=cluster_name,
            host=host,
            port=port,
            interval_seconds=interval_seconds,
            prefix=prefix,
            include_pattern=include_pattern,
            exclude_pattern=exclude_pattern,
            timeout_seconds=timeout_seconds,
            shutdown_timeout_seconds=shutdown_timeout_seconds,
        )

    except ValidationError as e:
        logger.error(f"Graphite configuration validation failed: {e}")
        raise
