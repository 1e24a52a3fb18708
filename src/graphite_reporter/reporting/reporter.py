"""
The Graphite reporter loop.

A single background thread wakes up on a fixed interval and, if the local
node is the leader of a started cluster, runs one report cycle:
collect -> filter/format -> send. Nothing raised inside a cycle ever leaves
the loop; a failed cycle is logged and the next tick proceeds normally.
"""

import logging
import threading
from typing import Optional

from ..collectors.base import ClusterStateProvider
from ..collectors.snapshot_collector import SnapshotCollector
from ..filtering import NameFilter
from ..models.config import DEFAULT_INTERVAL_SECONDS
from ..models.reporter import ReporterState, ReporterStats
from ..validation import CollectionError, TransportError
from .formatter import format_metrics
from .transport import GraphiteTransport

logger = logging.getLogger(__name__)

THREAD_NAME = "graphite_reporter"


class GraphiteReporterThread:
    """
    Leader-gated, fixed-interval reporter running on its own thread.

    Two events cross the thread boundary:

    - the stop flag, set once by stop() and checked at every loop test;
    - the wake event, which cuts the current sleep short. A wake without
      the stop flag just starts the next eligibility check early.

    Cycles never overlap and an in-flight cycle is never aborted: a stop
    requested mid-cycle takes effect once that cycle has returned.
    """

    def __init__(
        self,
        cluster: ClusterStateProvider,
        collector: SnapshotCollector,
        name_filter: NameFilter,
        transport: GraphiteTransport,
        prefix: str,
        interval_seconds: float = DEFAULT_INTERVAL_SECONDS,
    ):
        """
        Args:
            cluster: Answers readiness and leadership queries once per tick
            collector: Produces one Snapshot per cycle
            name_filter: Decides which metric paths are forwarded
            transport: Sends each cycle's batch to the collector endpoint
            prefix: Namespace prepended to every metric path
            interval_seconds: Sleep between two ticks
        """
        self.cluster = cluster
        self.collector = collector
        self.name_filter = name_filter
        self.transport = transport
        self.prefix = prefix
        self.interval_seconds = interval_seconds

        self.state = ReporterState.IDLE
        self.stats = ReporterStats()
        self.thread: Optional[threading.Thread] = None

        self._closed = threading.Event()
        self._wake = threading.Event()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    @property
    def is_alive(self) -> bool:
        return self.thread is not None and self.thread.is_alive()

    def start(self) -> None:
        """Start the background thread. Does nothing if already started."""
        if self.thread is not None:
            logger.warning("Graphite reporter thread already started")
            return
        if self.closed:
            logger.warning("Graphite reporter is stopped and cannot be restarted")
            return

        self.thread = threading.Thread(target=self.run, name=THREAD_NAME, daemon=True)
        self.thread.start()

    def interrupt(self) -> None:
        """Cut the current sleep short; the loop re-checks immediately."""
        self._wake.set()

    def stop(self) -> None:
        """
        Request the loop to stop. Safe to call more than once.

        A sleeping loop stops right away; a running cycle completes first.
        """
        if self.closed:
            return
        self._closed.set()
        self._wake.set()
        if self.thread is None:
            self.state = ReporterState.STOPPED
        logger.debug("Graphite reporter stop requested")

    def join(self, timeout: Optional[float] = None) -> bool:
        """
        Wait for the background thread to finish.

        Returns:
            True if the thread has finished (or was never started)
        """
        if self.thread is None:
            return True
        self.thread.join(timeout=timeout)
        if self.thread.is_alive():
            logger.warning(f"Graphite reporter thread did not stop within {timeout}s")
            return False
        return True

    def run(self) -> None:
        """Main loop; runs until stop() is called."""
        logger.debug(f"run(), (closed = {self.closed})")
        try:
            while not self._closed.is_set():
                self.run_once()
                if self._closed.is_set():
                    break
                self._sleep()
        finally:
            self.state = ReporterState.STOPPED
            logger.debug(f"ending run(), (closed = {self.closed})")

    def _sleep(self) -> None:
        self.state = ReporterState.SLEEPING
        if self._wake.wait(timeout=self.interval_seconds):
            logger.debug("Graphite reporter woken up before the interval elapsed")
        # the stop flag is always set before the wake event, so clearing
        # here can never lose a stop request
        self._wake.clear()

    def run_once(self) -> bool:
        """
        Run one tick: the eligibility check and, if eligible, one cycle.

        Never raises. Does nothing once stop() has been called.

        Returns:
            True if a cycle ran and its batch was sent
        """
        if self._closed.is_set():
            return False
        self.state = ReporterState.CHECK_ELIGIBILITY
        try:
            eligible = self._is_eligible()
        except Exception as e:
            self._record_failure(e)
            return False

        if not eligible:
            self.state = ReporterState.SKIP_CYCLE
            self.stats.cycles_skipped += 1
            return False

        self.state = ReporterState.RUN_CYCLE
        try:
            timestamp, sent = self._run_cycle()
        except Exception as e:
            self._record_failure(e)
            return False

        self.stats.cycles_run += 1
        self.stats.metrics_sent += sent
        self.stats.last_cycle_epoch = timestamp
        return True

    def _is_eligible(self) -> bool:
        is_cluster_ready = self.cluster.is_cluster_ready()
        is_leader = self.cluster.is_local_node_leader()
        logger.debug(f"cycle (is_cluster_ready = {is_cluster_ready}, is_leader = {is_leader})")
        if is_cluster_ready and is_leader:
            return True

        node_name = self.cluster.local_node_name()
        if node_name is not None:
            logger.debug(f"[{node_name}] is not the leader of a started cluster, not triggering update")
        return False

    def _run_cycle(self):
        snapshot = self.collector.collect()
        lines = format_metrics(snapshot, self.name_filter, self.prefix)
        logger.debug(f"reporting {len(lines)} of {len(snapshot)} metrics...")
        sent = self.transport.send(lines)
        return snapshot.timestamp, sent

    def _record_failure(self, error: Exception) -> None:
        self.stats.cycles_failed += 1
        self.stats.last_error = f"{type(error).__name__}: {error}"
        if isinstance(error, (CollectionError, TransportError)):
            logger.error(f"Graphite report cycle failed: {error}")
        else:
            logger.error("unexpected exception on cycle", exc_info=True)
