"""
Data models for the reporter.

Configuration Models:
- Graphite reporter settings and the application configuration root

Snapshot Models:
- Metric samples and the per-cycle snapshot that holds them

Runtime Models:
- Reporter loop states and activity counters
"""

from .config import (
    AppConfig,
    GraphiteConfig,
    SERVICE_NAME,
    DEFAULT_CLUSTER_NAME,
    DEFAULT_GRAPHITE_PORT,
    DEFAULT_INTERVAL_SECONDS,
    default_metric_prefix,
)
from .snapshot import MetricSample, Snapshot
from .reporter import ReporterState, ReporterStats

__all__ = [
    # Configuration
    "AppConfig",
    "GraphiteConfig",
    "SERVICE_NAME",
    "DEFAULT_CLUSTER_NAME",
    "DEFAULT_GRAPHITE_PORT",
    "DEFAULT_INTERVAL_SECONDS",
    "default_metric_prefix",
    # Snapshot
    "MetricSample",
    "Snapshot",
    # Runtime
    "ReporterState",
    "ReporterStats",
]
