"""
Standalone stats source and cluster view backed by psutil.

LocalStatsSource reports host and process statistics for the machine the
reporter runs on; StandaloneCluster is a single-node cluster in which the
local node is always the leader. Together they let the reporter run outside
a clustered service, e.g. from the command line.
"""

import logging
import os
import socket
import threading
from typing import Any, Dict, Iterable, Mapping, Optional, Sequence

import psutil

from ..validation import ResolutionError
from .base import ClusterStateProvider, ShardHandle, StatsSource

logger = logging.getLogger(__name__)


class StandaloneCluster(ClusterStateProvider):
    """
    A cluster consisting of this process only.

    The cluster becomes ready once mark_started() has been called and the
    local node is always the elected leader.
    """

    def __init__(self, node_name: Optional[str] = None, started: bool = False):
        self._node_name = node_name or socket.gethostname()
        self._started = threading.Event()
        if started:
            self._started.set()

    def mark_started(self) -> None:
        self._started.set()

    def mark_stopped(self) -> None:
        self._started.clear()

    def is_cluster_ready(self) -> bool:
        return self._started.is_set()

    def is_local_node_leader(self) -> bool:
        return True

    def local_node_name(self) -> Optional[str]:
        return self._node_name


class LocalStatsSource(StatsSource):
    """
    Node stats for the local host and the current process, via psutil.

    The standalone node hosts no indices, so list_indices() is empty and
    list_shards() fails for every index.
    """

    def __init__(self, node_name: Optional[str] = None, pid: Optional[int] = None,
                 disk_path: str = os.sep):
        """
        Args:
            node_name: Name to publish node metrics under (default: hostname)
            pid: Process to report process stats for (default: this process)
            disk_path: Mount point reported under ``fs.total``
        """
        self._node_name = node_name or socket.gethostname()
        self.process = psutil.Process(pid)
        self.disk_path = disk_path

        # the first non-blocking cpu_percent() call always returns 0.0;
        # prime both counters so the first snapshot reports real usage
        psutil.cpu_percent(interval=None)
        self.process.cpu_percent(interval=None)

    @property
    def node_name(self) -> str:
        return self._node_name

    def node_stats(self) -> Mapping[str, Any]:
        return {
            "os": self._os_stats(),
            "process": self._process_stats(),
            "fs": self._fs_stats(),
            "network": self._network_stats(),
        }

    def node_indices_stats(self) -> Mapping[str, Any]:
        return {}

    def list_indices(self) -> Iterable[str]:
        return []

    def list_shards(self, index: str) -> Sequence[ShardHandle]:
        raise ResolutionError(f"index [{index}] is not hosted on standalone node", index=index)

    def _os_stats(self) -> Dict[str, Any]:
        vmem = psutil.virtual_memory()
        swap = psutil.swap_memory()
        stats: Dict[str, Any] = {
            "cpu": {"percent": psutil.cpu_percent(interval=None)},
            "mem": {
                "total_in_bytes": vmem.total,
                "free_in_bytes": vmem.available,
                "used_in_bytes": vmem.total - vmem.available,
                "free_percent": round(100.0 - vmem.percent, 1),
                "used_percent": vmem.percent,
            },
            "swap": {
                "total_in_bytes": swap.total,
                "free_in_bytes": swap.free,
                "used_in_bytes": swap.used,
            },
        }
        try:
            one, five, fifteen = psutil.getloadavg()
            stats["load_average"] = {"1m": one, "5m": five, "15m": fifteen}
        except (AttributeError, OSError):
            logger.debug("Load average is not available on this platform")
        return stats

    def _process_stats(self) -> Dict[str, Any]:
        proc = self.process
        with proc.oneshot():
            cpu_times = proc.cpu_times()
            mem = proc.memory_info()
            stats: Dict[str, Any] = {
                "cpu": {
                    "percent": proc.cpu_percent(interval=None),
                    "total_in_millis": int((cpu_times.user + cpu_times.system) * 1000),
                },
                "mem": {
                    "resident_in_bytes": mem.rss,
                    "virtual_in_bytes": mem.vms,
                },
                "num_threads": proc.num_threads(),
            }
            try:
                stats["open_file_descriptors"] = proc.num_fds()
            except (AttributeError, psutil.AccessDenied):
                logger.debug("Open file descriptor count is not available")
        return stats

    def _fs_stats(self) -> Dict[str, Any]:
        try:
            usage = psutil.disk_usage(self.disk_path)
        except OSError as e:
            logger.debug(f"Cannot read disk usage of {self.disk_path}: {e}")
            return {}
        return {
            "total": {
                "total_in_bytes": usage.total,
                "free_in_bytes": usage.free,
                "used_in_bytes": usage.used,
            }
        }

    def _network_stats(self) -> Dict[str, Any]:
        try:
            counters = psutil.net_io_counters()
        except OSError as e:
            logger.debug(f"Cannot read network counters: {e}")
            return {}
        if counters is None:
            return {}
        return {
            "io": {
                "bytes_sent": counters.bytes_sent,
                "bytes_recv": counters.bytes_recv,
                "packets_sent": counters.packets_sent,
                "packets_recv": counters.packets_recv,
                "errin": counters.errin,
                "errout": counters.errout,
                "dropin": counters.dropin,
                "dropout": counters.dropout,
            }
        }
