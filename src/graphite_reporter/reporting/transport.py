"""
TCP transport to a Graphite plaintext collector.

One connection is opened per batch and closed right after, which keeps the
reporter indifferent to collector restarts between cycles.
"""

import logging
import socket
from typing import Iterable

from ..models.config import DEFAULT_TIMEOUT_SECONDS
from ..validation import TransportError

logger = logging.getLogger(__name__)


class GraphiteTransport:
    """
    Sends batches of protocol lines to one collector endpoint.

    Nothing is kept between calls to send(): no pooled connection, no
    buffered lines, no retry.
    """

    def __init__(self, host: str, port: int, timeout: float = DEFAULT_TIMEOUT_SECONDS):
        """
        Args:
            host: Collector host name or address
            port: Collector TCP port
            timeout: Connect and per-write timeout in seconds
        """
        self.host = host
        self.port = port
        self.timeout = timeout

    def send(self, lines: Iterable[str]) -> int:
        """
        Open a connection, write every line and close the connection.

        Args:
            lines: Newline-terminated protocol lines

        Returns:
            Number of lines written

        Raises:
            TransportError: If connecting or writing fails; lines after the
                            failing one are not sent
        """
        sent = 0
        try:
            with socket.create_connection((self.host, self.port), timeout=self.timeout) as sock:
                for line in lines:
                    sock.sendall(line.encode("utf-8"))
                    sent += 1
        except OSError as e:
            raise TransportError(
                f"Failed to send metrics to {self.host}:{self.port} after {sent} lines: {e}",
                host=self.host,
                port=self.port,
                sent=sent,
            ) from e

        logger.debug(f"Sent {sent} lines to {self.host}:{self.port}")
        return sent

    def __repr__(self) -> str:
        return f"GraphiteTransport({self.host}:{self.port})"


def send_lines(host: str, port: int, lines: Iterable[str],
               timeout: float = DEFAULT_TIMEOUT_SECONDS) -> int:
    """Send one batch over a fresh connection; see GraphiteTransport.send."""
    return GraphiteTransport(host, port, timeout=timeout).send(lines)
