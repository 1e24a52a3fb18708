"""
Command-line interface for the graphite_reporter package.

This module provides the main CLI entry point for the reporter.
"""

from .main import main, main_cli

__all__ = [
    "main",
    "main_cli",
]
