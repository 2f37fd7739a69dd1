from __future__ import annotations

from dataclasses import dataclass
from datetime import time

from ..core.constants import DEFAULT_ABSENT_CUTOFF, DEFAULT_LATE_CUTOFF
from .strategies.absent_strategy import AbsentStrategy
from .strategies.base import ClockInStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.present_strategy import PresentStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose the clock-in strategy from the cutoffs."""

    late_cutoff: time = DEFAULT_LATE_CUTOFF
    absent_cutoff: time = DEFAULT_ABSENT_CUTOFF

    def for_clock_in(self, *, clock_in: time) -> ClockInStrategy:
        if clock_in > self.absent_cutoff:
            return AbsentStrategy(self.absent_cutoff)
        if clock_in > self.late_cutoff:
            return LateStrategy(self.late_cutoff)
        return PresentStrategy()
