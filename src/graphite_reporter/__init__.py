"""
graphite_reporter: leader-gated metrics forwarding to Graphite.

This package periodically collects a node's statistics, filters the metric
names, formats them as Graphite plaintext lines and pushes each batch over
a fresh TCP connection. Only the elected leader of a started cluster reports.

The package is organized into specialized modules:
- config: Configuration loading and validation
- models: Configuration, snapshot and runtime data structures
- validation: Error taxonomy and input validation
- filtering: Include/exclude policy over metric paths
- collectors: Collaborator interfaces, snapshot flattening, psutil source
- reporting: Formatter, transport, reporter loop and lifecycle service
- cli: Command-line interface

Usage:
    From command line:
        graphite-reporter --host graphite.local --every 30s

    Programmatically:
        from graphite_reporter import GraphiteConfig, GraphiteService
        service = GraphiteService(GraphiteConfig(host="graphite.local"), cluster, stats_source)
        service.start()
        ...
        service.close()
"""

# Main interfaces
from .config import get_config, load_config, clear_config_cache, set_config_path
from .reporting import (
    GraphiteReporterThread,
    GraphiteService,
    GraphiteTransport,
    format_metrics,
    start_graphite_service,
)
from .filtering import NameFilter
from .collectors import (
    ClusterStateProvider,
    ShardHandle,
    SnapshotCollector,
    StatsSource,
)

# Model classes for external use
from .models import (
    AppConfig,
    GraphiteConfig,
    MetricSample,
    Snapshot,
    ReporterState,
    ReporterStats,
)

# Errors
from .validation import (
    ValidationError,
    ConfigurationError,
    ReporterError,
    CollectionError,
    ResolutionError,
    TransportError,
)

__version__ = "1.0.0"

__all__ = [
    # Main interfaces
    "get_config",
    "load_config",
    "clear_config_cache",
    "set_config_path",
    "GraphiteReporterThread",
    "GraphiteService",
    "GraphiteTransport",
    "format_metrics",
    "start_graphite_service",
    "NameFilter",
    "ClusterStateProvider",
    "ShardHandle",
    "SnapshotCollector",
    "StatsSource",
    # Models
    "AppConfig",
    "GraphiteConfig",
    "MetricSample",
    "Snapshot",
    "ReporterState",
    "ReporterStats",
    # Errors
    "ValidationError",
    "ConfigurationError",
    "ReporterError",
    "CollectionError",
    "ResolutionError",
    "TransportError",
]
