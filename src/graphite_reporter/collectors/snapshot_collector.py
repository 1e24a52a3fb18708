"""
Snapshot collection.

This module pulls the current stats trees from a StatsSource and flattens
them into a single ordered Snapshot of dotted metric paths:

- node stats:              ``<node>.<path>``
- node indices aggregate:  ``<node>.indices.<path>``
- per-shard stats:         ``indexes.<index>.id.<shard>.<path>``
"""

import logging
import math
import re
import time
from typing import Any, Callable, Iterator, List, Mapping, Tuple

from ..models.snapshot import Number, Snapshot
from ..validation import CollectionError, ResolutionError
from .base import ShardHandle, StatsSource

logger = logging.getLogger(__name__)

# Whitespace would split a line of the plaintext protocol.
_WHITESPACE_RE = re.compile(r"\s+")


def sanitize_segment(segment: Any) -> str:
    """Make one path segment safe for the plaintext protocol."""
    return _WHITESPACE_RE.sub("_", str(segment).strip())


def _is_metric_value(value: Any) -> bool:
    # bool is an int subclass but not a measurement
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    if isinstance(value, float):
        return math.isfinite(value)
    return False


def flatten_stats(tree: Any, prefix: str = "") -> Iterator[Tuple[str, Number]]:
    """
    Flatten a nested stats structure into (dotted path, value) pairs.

    Mappings contribute their keys as path segments, lists and tuples
    contribute the element position. Only finite numeric leaves are
    yielded; strings, booleans, None and NaN/inf are dropped. Order
    follows the input's iteration order.

    Args:
        tree: Nested mapping/list structure, or a single leaf
        prefix: Dotted path to prepend to every yielded path

    Yields:
        (path, value) tuples

    Examples:
        >>> list(flatten_stats({"mem": {"heap": 10, "pools": [1, 2]}}, "jvm"))
        [('jvm.mem.heap', 10), ('jvm.mem.pools.0', 1), ('jvm.mem.pools.1', 2)]
    """
    if isinstance(tree, Mapping):
        for key, item in tree.items():
            segment = sanitize_segment(key)
            if not segment:
                continue
            yield from flatten_stats(item, f"{prefix}.{segment}" if prefix else segment)
    elif isinstance(tree, (list, tuple)):
        for position, item in enumerate(tree):
            yield from flatten_stats(item, f"{prefix}.{position}" if prefix else str(position))
    elif prefix and _is_metric_value(tree):
        yield prefix, tree


class SnapshotCollector:
    """
    Builds one Snapshot per report cycle from a StatsSource.

    A failure of the node-level stats calls aborts the collection with
    CollectionError. A failure to resolve one index only drops that index's
    shards; the error is logged and kept in ``Snapshot.resolution_errors``.
    """

    def __init__(self, stats_source: StatsSource, clock: Callable[[], float] = time.time):
        """
        Args:
            stats_source: Producer of the node's stats trees
            clock: Returns seconds since epoch; the snapshot timestamp is
                   its value truncated to whole seconds
        """
        self.stats_source = stats_source
        self.clock = clock

    def collect(self) -> Snapshot:
        """
        Capture and flatten the current stats.

        Returns:
            A new Snapshot stamped with the cycle start time

        Raises:
            CollectionError: If the upstream stats calls fail
        """
        snapshot = Snapshot(timestamp=int(self.clock()))
        source = self.stats_source

        try:
            node = sanitize_segment(source.node_name)
            if not node:
                raise CollectionError("Stats source reported an empty node name")
            logger.debug("getting node stats...")
            node_stats = source.node_stats()
            logger.debug("getting node indices stats...")
            indices_stats = source.node_indices_stats()
            logger.debug("listing indices...")
            indices = list(source.list_indices())
        except CollectionError:
            raise
        except Exception as e:
            raise CollectionError(f"Failed to retrieve node stats: {e}") from e

        for path, value in flatten_stats(node_stats, node):
            snapshot.add(path, value)
        for path, value in flatten_stats(indices_stats, f"{node}.indices"):
            snapshot.add(path, value)

        logger.debug(f"getting shards of {len(indices)} indices...")
        for index in indices:
            try:
                shard_samples = self._collect_index(index)
            except ResolutionError as e:
                logger.warning(f"Skipping shards of index [{index}]: {e}")
                snapshot.resolution_errors.append(e)
                continue
            for path, value in shard_samples:
                snapshot.add(path, value)

        logger.debug(
            f"Collected {len(snapshot)} metrics at {snapshot.timestamp} "
            f"({len(snapshot.resolution_errors)} indices skipped)"
        )
        return snapshot

    def _collect_index(self, index: str) -> List[Tuple[str, Number]]:
        """
        Flatten the stats of every shard of one index.

        All of the index's shards are resolved before anything is added to
        the snapshot, so a failing index contributes no partial data.

        Raises:
            ResolutionError: If the index or one of its shards fails
        """
        try:
            shards: List[ShardHandle] = list(self.stats_source.list_shards(index))
            samples: List[Tuple[str, Number]] = []
            for shard in shards:
                base = f"indexes.{sanitize_segment(index)}.id.{shard.shard_id}"
                samples.extend(flatten_stats(shard.stats(), base))
            return samples
        except ResolutionError as e:
            if e.index is None:
                e.index = index
            raise
        except Exception as e:
            raise ResolutionError(f"Failed to resolve index [{index}]: {e}", index=index) from e
