"""
Runtime models for the reporter loop.

This module defines the loop's state machine states and the counters the
loop keeps about its own activity.
"""

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class ReporterState(Enum):
    """States of the reporter loop."""
    IDLE = "idle"
    CHECK_ELIGIBILITY = "check_eligibility"
    RUN_CYCLE = "run_cycle"
    SKIP_CYCLE = "skip_cycle"
    SLEEPING = "sleeping"
    STOPPED = "stopped"


@dataclass
class ReporterStats:
    """
    Counters about the reporter loop's activity.

    Only the loop thread writes these; other threads may read them for
    diagnostics.

    Attributes:
        start_time: When the stats object was created
        cycles_run: Cycles that completed collect, format and send
        cycles_skipped: Ticks skipped because the node was not eligible
        cycles_failed: Cycles abandoned because a stage raised
        metrics_sent: Total lines written to the collector
        last_cycle_epoch: Snapshot timestamp of the last successful cycle
        last_error: Text of the most recent cycle failure
    """
    start_time: float = field(default_factory=time.time)
    cycles_run: int = 0
    cycles_skipped: int = 0
    cycles_failed: int = 0
    metrics_sent: int = 0
    last_cycle_epoch: Optional[int] = None
    last_error: Optional[str] = None

    @property
    def uptime_seconds(self) -> float:
        """Time since the stats object was created, in seconds."""
        return time.time() - self.start_time

    @property
    def success_rate(self) -> float:
        """Successful cycles as a percentage of attempted cycles."""
        total = self.cycles_run + self.cycles_failed
        if total == 0:
            return 0.0
        return (self.cycles_run / total) * 100.0
