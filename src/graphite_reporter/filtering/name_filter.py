"""
Metric name filtering.

This module decides, per metric path, whether a measurement is forwarded to
the collector, based on optional include and exclude regexes.
"""

import logging
from typing import Optional, Pattern

from ..validation import compile_regex_pattern

logger = logging.getLogger(__name__)


class NameFilter:
    """
    Include/exclude policy over metric paths.

    Patterns are compiled once at construction and never change afterwards,
    so one instance can be shared read-only with the reporter thread.

    Matching uses ``re.search``: a pattern matches if it is found anywhere
    in the path. ``"heap"`` therefore matches both ``jvm.mem.heap.used``
    and ``jvm.mem.nonheap.used``; anchor the pattern if that is not wanted.
    """

    def __init__(self, include: Optional[str] = None, exclude: Optional[str] = None):
        """
        Compile the configured patterns.

        Args:
            include: Regex a path must contain to be forwarded, or None
            exclude: Regex that rejects any path containing it, or None

        Raises:
            ConfigurationError: If either pattern is malformed
        """
        self.include: Optional[Pattern[str]] = (
            compile_regex_pattern(include, field_name="metrics.graphite.include")
            if include else None
        )
        self.exclude: Optional[Pattern[str]] = (
            compile_regex_pattern(exclude, field_name="metrics.graphite.exclude")
            if exclude else None
        )

    def should_forward(self, path: str) -> bool:
        """
        Decide whether a metric path is forwarded.

        The exclude pattern is checked first and always wins; then, if an
        include pattern is configured, the path must match it.

        Examples:
            >>> f = NameFilter(include=r"^jvm\\.", exclude="heap")
            >>> f.should_forward("jvm.mem.heap.used")
            False
            >>> f.should_forward("jvm.threads.count")
            True
        """
        if self.exclude is not None and self.exclude.search(path):
            return False
        if self.include is not None and not self.include.search(path):
            return False
        return True

    def describe(self) -> str:
        """Render the configured patterns for log output."""
        parts = []
        if self.include is not None:
            parts.append(f"include [{self.include.pattern}]")
        if self.exclude is not None:
            parts.append(f"exclude [{self.exclude.pattern}]")
        return " ".join(parts)

    def __repr__(self) -> str:
        return f"NameFilter({self.describe() or 'accept all'})"
