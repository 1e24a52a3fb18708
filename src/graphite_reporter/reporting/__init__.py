"""
Report cycle components for the graphite_reporter package.

- formatter: snapshot -> Graphite plaintext lines
- transport: one TCP connection per batch
- reporter: the leader-gated, fixed-interval background loop
- service: lifecycle wiring for a host service
"""

from .formatter import format_line, format_metrics, format_value, sanitize_path
from .transport import GraphiteTransport, send_lines
from .reporter import GraphiteReporterThread
from .service import GraphiteService, start_graphite_service

__all__ = [
    "format_line",
    "format_metrics",
    "format_value",
    "sanitize_path",
    "GraphiteTransport",
    "send_lines",
    "GraphiteReporterThread",
    "GraphiteService",
    "start_graphite_service",
]
