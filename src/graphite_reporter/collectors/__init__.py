"""
Stats collection for the graphite_reporter package.

This package provides:

- Abstract interfaces for the collaborators the reporter consumes: the
  cluster state (readiness and leadership) and the stats source
- The SnapshotCollector, which flattens the stats trees into one ordered
  Snapshot of dotted metric paths per report cycle
- A psutil-backed stats source and single-node cluster for running the
  reporter standalone
"""

from .base import ClusterStateProvider, ShardHandle, StatsSource
from .snapshot_collector import SnapshotCollector, flatten_stats, sanitize_segment
from .psutil_source import LocalStatsSource, StandaloneCluster

__all__ = [
    "ClusterStateProvider",
    "ShardHandle",
    "StatsSource",
    "SnapshotCollector",
    "flatten_stats",
    "sanitize_segment",
    "LocalStatsSource",
    "StandaloneCluster",
]
