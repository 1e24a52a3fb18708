"""
Lifecycle component wiring the reporter into a host service.

GraphiteService builds the reporter from a GraphiteConfig and the host's
collaborators, and exposes start/stop/close for the host's own lifecycle.
"""

import logging
from typing import Optional

from ..collectors.base import ClusterStateProvider, StatsSource
from ..collectors.snapshot_collector import SnapshotCollector
from ..filtering import NameFilter
from ..models.config import GraphiteConfig
from ..validation import ConfigurationError
from .reporter import GraphiteReporterThread
from .transport import GraphiteTransport

logger = logging.getLogger(__name__)


class GraphiteService:
    """
    Starts and stops the Graphite reporter thread.

    Construction validates the configuration (raising ConfigurationError
    for malformed patterns) but starts nothing; start() launches the
    reporter only if a collector host is configured.
    """

    def __init__(self, config: GraphiteConfig, cluster: ClusterStateProvider,
                 stats_source: StatsSource):
        """
        Args:
            config: Reporter settings
            cluster: Readiness and leadership oracle of the host service
            stats_source: Producer of this node's stats

        Raises:
            ConfigurationError: If the include or exclude pattern is malformed
        """
        self.config = config
        self.name_filter = NameFilter(config.include_pattern, config.exclude_pattern)
        self.prefix = config.prefix
        self.reporter = GraphiteReporterThread(
            cluster=cluster,
            collector=SnapshotCollector(stats_source),
            name_filter=self.name_filter,
            transport=GraphiteTransport(config.host, config.port, timeout=config.timeout_seconds),
            prefix=self.prefix,
            interval_seconds=config.interval_seconds,
        )
        self._stopped = False

    @property
    def is_running(self) -> bool:
        return self.reporter.is_alive and not self.reporter.closed

    def start(self) -> bool:
        """
        Start reporting if a collector host is configured.

        Returns:
            True if the reporter thread was started
        """
        if not self.config.enabled:
            logger.error("Graphite reporting disabled, no graphite host configured")
            return False

        self.reporter.start()
        filters = self.name_filter.describe()
        logger.info(
            f"Graphite reporting triggered every [{self.config.interval_seconds}s] to host "
            f"[{self.config.host}:{self.config.port}] with metric prefix [{self.prefix}]"
            + (f" {filters}" if filters else "")
        )
        return True

    def stop(self) -> None:
        """Ask the reporter to stop. Safe to call more than once."""
        if self._stopped:
            return
        self._stopped = True
        self.reporter.stop()
        logger.info("Graphite reporter stopped")

    def close(self) -> None:
        """Stop the reporter and wait for its thread to finish."""
        self.stop()
        self.reporter.join(timeout=self.config.shutdown_timeout_seconds)

    def __enter__(self) -> "GraphiteService":
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


def start_graphite_service(config: GraphiteConfig, cluster: ClusterStateProvider,
                           stats_source: StatsSource) -> Optional[GraphiteService]:
    """
    Build and start the reporter for a host service.

    A configuration problem leaves the feature inactive instead of failing
    the host: it is logged and None is returned.

    Returns:
        The started (or disabled) service, or None if misconfigured
    """
    try:
        service = GraphiteService(config, cluster, stats_source)
    except ConfigurationError as e:
        logger.error(f"Graphite reporting disabled, invalid configuration: {e}")
        return None
    service.start()
    return service
