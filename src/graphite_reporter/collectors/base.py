"""
Defines the interfaces the reporter consumes from its host service.

This module provides:
- ClusterStateProvider: answers "is the cluster up?" and "am I the leader?".
- StatsSource: produces the raw, nested stats trees for this node.
- ShardHandle: one shard of one index hosted on this node.

The reporter never implements these itself; the service embedding it (or
the standalone implementation in psutil_source) supplies them.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Iterable, Mapping, Optional, Sequence

logger = logging.getLogger(__name__)


class ClusterStateProvider(ABC):
    """
    Read-only view of cluster membership, polled once per tick.
    """

    @abstractmethod
    def is_cluster_ready(self) -> bool:
        """Return True once the cluster service is fully started."""
        pass

    @abstractmethod
    def is_local_node_leader(self) -> bool:
        """Return True if this process is the currently elected leader."""
        pass

    def local_node_name(self) -> Optional[str]:
        """Name of the local node, used only for log output."""
        return None


class ShardHandle(ABC):
    """
    A resolved shard of an index on this node.

    Attributes:
        index: Name of the index the shard belongs to
        shard_id: Numeric shard id within the index
    """

    def __init__(self, index: str, shard_id: int):
        self.index = index
        self.shard_id = shard_id

    @abstractmethod
    def stats(self) -> Mapping[str, Any]:
        """Return this shard's nested stats tree."""
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(index={self.index!r}, shard_id={self.shard_id})"


class StatsSource(ABC):
    """
    Abstract producer of the node's statistics.

    Every method returns an opaque nested mapping whose numeric leaves
    become metrics; the field set is up to the implementation.
    """

    @property
    @abstractmethod
    def node_name(self) -> str:
        """Name under which node-level metrics are published."""
        pass

    @abstractmethod
    def node_stats(self) -> Mapping[str, Any]:
        """Return node-wide stats (os, process, fs, network, ...)."""
        pass

    @abstractmethod
    def node_indices_stats(self) -> Mapping[str, Any]:
        """Return the aggregate stats of all indices on this node."""
        pass

    @abstractmethod
    def list_indices(self) -> Iterable[str]:
        """Return the names of every index known to the cluster."""
        pass

    @abstractmethod
    def list_shards(self, index: str) -> Sequence[ShardHandle]:
        """
        Resolve the shards of one index hosted on this node.

        Raises:
            ResolutionError: If the index cannot be resolved
        """
        pass
