"""
Metric name filtering for the graphite_reporter package.
"""

from .name_filter import NameFilter

__all__ = [
    "NameFilter",
]
