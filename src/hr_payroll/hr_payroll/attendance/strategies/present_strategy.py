from __future__ import annotations

from datetime import time

from ...core.enums import AttendanceStatus
from .base import ClockInStrategy, StatusDecision


class PresentStrategy(ClockInStrategy):
    """Clock-in on or before the late cutoff."""

    def decide(self, *, clock_in: time) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.PRESENT)
