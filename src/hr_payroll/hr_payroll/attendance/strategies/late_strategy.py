from __future__ import annotations

from datetime import time

from ...core.enums import AttendanceStatus
from .base import ClockInStrategy, StatusDecision


class LateStrategy(ClockInStrategy):
    """Late clock-in."""

    def __init__(self, cutoff: time):
        self._cutoff = cutoff

    def decide(self, *, clock_in: time) -> StatusDecision:
        return StatusDecision(
            status=AttendanceStatus.LATE,
            note=f"Clocked in at {clock_in.strftime('%H:%M')} after {self._cutoff.strftime('%H:%M')}",
        )
