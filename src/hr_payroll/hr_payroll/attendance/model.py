from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance entry per employee per calendar date."""

    attendance_id: int
    employee_id: int
    work_date: date
    clock_in_time: Optional[time]
    clock_out_time: Optional[time]
    status: AttendanceStatus
    remarks: Optional[str] = None


@dataclass(frozen=True)
class AttendanceSummary:
    """Per-employee presence figures over a pay period.

    ``absent_days`` counts only absences not excused by approved leave;
    ``late_days`` is a subset of ``present_days``.
    """

    employee_id: int
    period_start: date
    period_end: date
    present_days: int = 0
    late_days: int = 0
    absent_days: int = 0
    leave_days: int = 0
