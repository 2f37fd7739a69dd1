from __future__ import annotations

from datetime import time

from ...core.enums import AttendanceStatus
from .base import ClockInStrategy, StatusDecision


class AbsentStrategy(ClockInStrategy):
    """Clock-in so late in the day that it counts as an absence."""

    def __init__(self, cutoff: time):
        self._cutoff = cutoff

    def decide(self, *, clock_in: time) -> StatusDecision:
        return StatusDecision(
            status=AttendanceStatus.ABSENT,
            note=f"Clocked in at {clock_in.strftime('%H:%M')} after absence cutoff {self._cutoff.strftime('%H:%M')}",
        )
