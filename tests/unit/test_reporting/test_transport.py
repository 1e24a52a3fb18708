"""
Unit tests for the TCP transport.
"""

import socket
from unittest.mock import MagicMock, patch

import pytest

from graphite_reporter.reporting import GraphiteTransport, send_lines
from graphite_reporter.validation import TransportError


@pytest.mark.unit
class TestGraphiteTransport:
    """Test cases for GraphiteTransport.send."""

    def test_send_writes_every_line(self, graphite_server):
        transport = GraphiteTransport(graphite_server.host, graphite_server.port, timeout=2.0)
        lines = ["p.a 1 10\n", "p.b 2 10\n", "p.c 3 10\n"]

        sent = transport.send(lines)

        assert sent == 3
        assert graphite_server.wait_for_batches(1)
        assert graphite_server.batches == [lines]

    def test_fresh_connection_per_send(self, graphite_server):
        transport = GraphiteTransport(graphite_server.host, graphite_server.port, timeout=2.0)

        transport.send(["p.a 1 10\n"])
        transport.send(["p.a 2 20\n"])

        assert graphite_server.wait_for_batches(2)
        assert sorted(graphite_server.lines) == ["p.a 1 10\n", "p.a 2 20\n"]

    def test_empty_batch(self, graphite_server):
        transport = GraphiteTransport(graphite_server.host, graphite_server.port, timeout=2.0)

        assert transport.send([]) == 0

    def test_connection_refused_raises_transport_error(self, unused_tcp_port):
        transport = GraphiteTransport("127.0.0.1", unused_tcp_port, timeout=1.0)

        with pytest.raises(TransportError) as exc_info:
            transport.send(["p.a 1 10\n"])

        assert exc_info.value.sent == 0
        assert exc_info.value.port == unused_tcp_port
        assert isinstance(exc_info.value.__cause__, OSError)

    def test_write_failure_stops_remaining_lines(self):
        sock = MagicMock()
        sock.__enter__.return_value = sock
        sock.__exit__.return_value = False
        sock.sendall.side_effect = [None, BrokenPipeError("reset"), None]

        with patch("socket.create_connection", return_value=sock) as create:
            transport = GraphiteTransport("graphite.local", 2003, timeout=3.0)
            with pytest.raises(TransportError) as exc_info:
                transport.send(["a 1 1\n", "b 2 1\n", "c 3 1\n"])

        create.assert_called_once_with(("graphite.local", 2003), timeout=3.0)
        assert exc_info.value.sent == 1
        assert sock.sendall.call_count == 2
        sock.__exit__.assert_called_once()

    def test_timeout_raises_transport_error(self):
        with patch("socket.create_connection", side_effect=socket.timeout("timed out")):
            with pytest.raises(TransportError):
                GraphiteTransport("graphite.local", 2003).send(["a 1 1\n"])

    def test_lines_are_utf8_encoded(self):
        sock = MagicMock()
        sock.__enter__.return_value = sock
        sock.__exit__.return_value = False

        with patch("socket.create_connection", return_value=sock):
            send_lines("graphite.local", 2003, ["p.café 1 1\n"])

        sock.sendall.assert_called_once_with("p.café 1 1\n".encode("utf-8"))
