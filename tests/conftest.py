"""
Pytest configuration and shared fixtures for the graphite_reporter test suite.

This module provides fake collaborators (cluster state, stats source), an
in-process Graphite line collector and configuration file helpers.
"""

import shutil
import socketserver
import sys
import tempfile
import threading
import time
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

import pytest

# Add src to Python path for testing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from graphite_reporter.collectors.base import ClusterStateProvider, ShardHandle, StatsSource  # noqa: E402
from graphite_reporter.validation import ResolutionError  # noqa: E402


# ============================================================================
# Test Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
    config.addinivalue_line("markers", "slow: mark test as slow running")


# ============================================================================
# Core Fixtures
# ============================================================================


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path, ignore_errors=True)


# ============================================================================
# Fake Collaborators
# ============================================================================


class FakeCluster(ClusterStateProvider):
    """Cluster view whose answers are set by the test."""

    def __init__(self, ready: bool = True, leader: bool = True, node_name: str = "node1"):
        self.ready = ready
        self.leader = leader
        self.node_name = node_name
        self.ready_calls = 0
        self.leader_calls = 0

    def is_cluster_ready(self) -> bool:
        self.ready_calls += 1
        return self.ready

    def is_local_node_leader(self) -> bool:
        self.leader_calls += 1
        return self.leader

    def local_node_name(self) -> Optional[str]:
        return self.node_name


class FakeShard(ShardHandle):
    def __init__(self, index: str, shard_id: int, stats: Mapping[str, Any]):
        super().__init__(index, shard_id)
        self._stats = stats

    def stats(self) -> Mapping[str, Any]:
        return self._stats


class FakeStatsSource(StatsSource):
    """
    Stats source serving fixed trees.

    Args:
        shards: index name -> list of per-shard stats trees
        failing_indices: indices whose list_shards() raises ResolutionError
    """

    def __init__(
        self,
        node_name: str = "node1",
        node: Optional[Mapping[str, Any]] = None,
        indices: Optional[Mapping[str, Any]] = None,
        shards: Optional[Dict[str, List[Mapping[str, Any]]]] = None,
        failing_indices: Sequence[str] = (),
    ):
        self._node_name = node_name
        self.node = node if node is not None else {"jvm": {"mem": {"heap_used_in_bytes": 1024}}}
        self.indices = indices if indices is not None else {"docs": {"count": 3}}
        self.shards = shards if shards is not None else {}
        self.failing_indices = set(failing_indices)
        self.node_stats_calls = 0
        self.fail_node_stats: Optional[Exception] = None

    @property
    def node_name(self) -> str:
        return self._node_name

    def node_stats(self) -> Mapping[str, Any]:
        self.node_stats_calls += 1
        if self.fail_node_stats is not None:
            raise self.fail_node_stats
        return self.node

    def node_indices_stats(self) -> Mapping[str, Any]:
        return self.indices

    def list_indices(self):
        return list(self.shards.keys())

    def list_shards(self, index: str):
        if index in self.failing_indices:
            raise ResolutionError(f"index [{index}] missing", index=index)
        return [FakeShard(index, shard_id, stats) for shard_id, stats in enumerate(self.shards[index])]


@pytest.fixture
def fake_cluster():
    return FakeCluster()


@pytest.fixture
def fake_stats_source():
    return FakeStatsSource()


@pytest.fixture
def cluster_factory():
    """Build FakeCluster instances with custom answers."""
    return FakeCluster


@pytest.fixture
def stats_source_factory():
    """Build FakeStatsSource instances with custom trees."""
    return FakeStatsSource


# ============================================================================
# Graphite Line Collector
# ============================================================================


class GraphiteLineServer:
    """
    In-process TCP server recording every line it receives.

    Each accepted connection is recorded as one batch.
    """

    def __init__(self):
        self.batches: List[List[str]] = []
        self._lock = threading.Lock()
        owner = self

        class Handler(socketserver.StreamRequestHandler):
            def handle(self):
                batch = [raw.decode("utf-8") for raw in self.rfile]
                with owner._lock:
                    owner.batches.append(batch)

        self.server = socketserver.ThreadingTCPServer(("127.0.0.1", 0), Handler)
        self.server.daemon_threads = True
        self.host, self.port = self.server.server_address
        self.thread = threading.Thread(target=self.server.serve_forever, daemon=True)

    def start(self) -> "GraphiteLineServer":
        self.thread.start()
        return self

    def close(self) -> None:
        self.server.shutdown()
        self.server.server_close()

    @property
    def lines(self) -> List[str]:
        with self._lock:
            return [line for batch in self.batches for line in batch]

    def wait_for_batches(self, count: int, timeout: float = 5.0) -> bool:
        deadline = time.monotonic() + timeout
        while time.monotonic() < deadline:
            with self._lock:
                if len(self.batches) >= count:
                    return True
            time.sleep(0.01)
        return False


@pytest.fixture
def graphite_server():
    """A running line-collecting Graphite server on a free local port."""
    server = GraphiteLineServer().start()
    yield server
    server.close()


@pytest.fixture
def unused_tcp_port():
    """A local port with nothing listening on it."""
    import socket

    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def sample_graphite_data():
    """Sample `[metrics.graphite]` table."""
    return {
        "host": "graphite.local",
        "port": 2004,
        "every": "30s",
        "include": "^node1\\.",
        "exclude": "heap",
    }


@pytest.fixture
def config_file(temp_dir, sample_graphite_data):
    """Write a config.toml for the tests and return its path."""
    import toml

    config_path = temp_dir / "config.toml"
    with open(config_path, "w") as f:
        toml.dump({"cluster": {"name": "mycluster"}, "metrics": {"graphite": sample_graphite_data}}, f)
    return config_path


@pytest.fixture(autouse=True)
def clear_config_after_test():
    """Automatically clear configuration cache after each test."""
    original_config_path = Path(__file__).parent.parent / "conf" / "config.toml"

    yield

    from graphite_reporter.config import clear_config_cache, set_config_path

    clear_config_cache()
    set_config_path(original_config_path)
