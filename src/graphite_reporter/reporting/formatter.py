"""
Formatting of snapshots into Graphite plaintext protocol lines.

Every line has the form ``<prefix>.<path> <value> <timestamp>\\n``.
"""

import logging
from decimal import Decimal
from typing import List, Mapping, Optional, Union

from ..collectors.snapshot_collector import sanitize_segment
from ..filtering import NameFilter
from ..models.snapshot import Number, Snapshot

logger = logging.getLogger(__name__)


def format_value(value: Number) -> str:
    """
    Render a measurement in stable decimal form.

    Integers are written as-is. Floats use the shortest representation
    that round-trips, always in positional notation (never ``1e-05``),
    and keep a ``.0`` when integral.

    Examples:
        >>> format_value(1024)
        '1024'
        >>> format_value(0.25)
        '0.25'
        >>> format_value(1e-05)
        '0.00001'
        >>> format_value(3.0)
        '3.0'
    """
    if isinstance(value, bool):
        return str(int(value))
    if isinstance(value, int):
        return str(value)
    text = repr(float(value))
    if "e" in text or "E" in text:
        text = format(Decimal(text), "f")
        if "." not in text:
            text += ".0"
    return text


def sanitize_path(path: str) -> str:
    """Sanitize every dotted segment of a path; see sanitize_segment."""
    return ".".join(sanitize_segment(segment) for segment in path.split("."))


def format_line(prefix: str, path: str, value: Number, timestamp: int) -> str:
    """
    Render one protocol line, including the trailing newline.

    Whitespace inside the path is replaced so the line always has exactly
    three fields.
    """
    return f"{prefix}.{sanitize_path(path)} {format_value(value)} {timestamp}\n"


def format_metrics(
    snapshot: Union[Snapshot, Mapping[str, Number]],
    name_filter: NameFilter,
    prefix: str,
    timestamp: Optional[int] = None,
) -> List[str]:
    """
    Convert a snapshot into the batch of lines for one report cycle.

    Samples rejected by the name filter are skipped; the rest keep their
    snapshot order. Every line carries the same timestamp.

    Args:
        snapshot: Snapshot, or an ordered mapping of path -> value
        name_filter: Policy deciding which paths are forwarded
        prefix: Namespace prepended to every path
        timestamp: Seconds since epoch for the whole batch; defaults to
                   the snapshot's own timestamp

    Returns:
        List of newline-terminated protocol lines

    Raises:
        ValueError: If a plain mapping is given without a timestamp

    Examples:
        >>> format_metrics({"indices.count": 3}, NameFilter(), "es.mycluster", 1700000000)
        ['es.mycluster.indices.count 3 1700000000\\n']
    """
    if timestamp is None:
        if not isinstance(snapshot, Snapshot):
            raise ValueError("timestamp is required when formatting a plain mapping")
        timestamp = snapshot.timestamp

    lines = [
        format_line(prefix, path, value, timestamp)
        for path, value in snapshot.items()
        if name_filter.should_forward(path)
    ]
    logger.debug(f"Formatted {len(lines)} lines with prefix [{prefix}] at {timestamp}")
    return lines
