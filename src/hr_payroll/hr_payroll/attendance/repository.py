from __future__ import annotations

from datetime import date, time
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_for_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_range(
        self,
        *,
        start_date: date,
        end_date: date,
        employee_id: Optional[int] = None,
    ) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def create(
        self,
        *,
        employee_id: int,
        work_date: date,
        clock_in_time: Optional[time],
        status: AttendanceStatus,
        remarks: Optional[str] = None,
    ) -> int:
        raise NotImplementedError

    def update_clock_out(self, *, attendance_id: int, clock_out_time: time) -> bool:
        raise NotImplementedError

    def update_remarks(self, *, attendance_id: int, remarks: Optional[str]) -> bool:
        raise NotImplementedError
