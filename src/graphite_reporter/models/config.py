"""
Configuration data models.

This module contains the configuration data structures for the Graphite
reporter and the application configuration that wraps it.
"""

from dataclasses import dataclass, field
from typing import Optional

# Service name every default metric prefix starts with.
SERVICE_NAME = "elasticsearch"
DEFAULT_CLUSTER_NAME = "elasticsearch"
DEFAULT_GRAPHITE_PORT = 2003
DEFAULT_INTERVAL_SECONDS = 60.0
DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_SHUTDOWN_TIMEOUT_SECONDS = 5.0


def default_metric_prefix(cluster_name: str) -> str:
    """Return the namespace used when no explicit prefix is configured."""
    return f"{SERVICE_NAME}.{cluster_name}"


@dataclass
class GraphiteConfig:
    """
    Settings for the Graphite reporter, loaded from `[metrics.graphite]`.
    """

    # Name of the cluster the reporter runs in, used for the default prefix.
    cluster_name: str = DEFAULT_CLUSTER_NAME
    # Collector host; an empty host disables reporting entirely.
    host: str = ""
    # Collector port for the plaintext protocol.
    port: int = DEFAULT_GRAPHITE_PORT
    # Seconds between two report cycles.
    interval_seconds: float = DEFAULT_INTERVAL_SECONDS
    # Namespace prepended to every metric path; derived from cluster_name if unset.
    prefix: Optional[str] = None
    # Optional regexes over metric paths (unanchored search semantics).
    include_pattern: Optional[str] = None
    exclude_pattern: Optional[str] = None
    # Connect/write timeout for one transport attempt, in seconds.
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    # How long close() waits for the reporter thread to finish, in seconds.
    shutdown_timeout_seconds: float = DEFAULT_SHUTDOWN_TIMEOUT_SECONDS

    def __post_init__(self):
        if not self.prefix:
            self.prefix = default_metric_prefix(self.cluster_name)

    @property
    def enabled(self) -> bool:
        """True when a collector host is configured."""
        return bool(self.host)


@dataclass
class AppConfig:
    """
    The root configuration object that aggregates all loaded settings.
    """

    cluster_name: str = DEFAULT_CLUSTER_NAME
    graphite: GraphiteConfig = field(default_factory=GraphiteConfig)
