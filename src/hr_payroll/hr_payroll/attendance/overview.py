from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..core.enums import AttendanceStatus
from ..employees.repository import EmployeeRepository
from ..leave.repository import LeaveRepository
from .classifier import classify_day
from .repository import AttendanceRepository


@dataclass(frozen=True)
class AttendanceOverview:
    """Point-in-time attendance counts for one date.

    ``late_today`` is a subset of ``present_today``; the other three counts
    partition ``total_employees``.
    """

    day: date
    total_employees: int
    present_today: int
    late_today: int
    on_leave_today: int
    absent_today: int


class AttendanceOverviewAggregator:
    """Single home of the per-employee daily classification used by dashboards."""

    def __init__(self, employees: EmployeeRepository, attendance: AttendanceRepository, leaves: LeaveRepository):
        self._employees = employees
        self._attendance = attendance
        self._leaves = leaves

    def overview(self, day: date) -> AttendanceOverview:
        roster = self._employees.list_active()
        status_by_employee = {r.employee_id: r.status for r in self._attendance.list_for_date(day)}
        on_leave_ids = {
            lv.employee_id
            for lv in self._leaves.list_approved_overlapping(start_date=day, end_date=day)
            if lv.covers(day)
        }

        present = late = on_leave = absent = 0
        for employee in roster:
            kind = classify_day(
                status_by_employee.get(employee.employee_id),
                on_approved_leave=employee.employee_id in on_leave_ids,
            )
            if kind == AttendanceStatus.ON_LEAVE:
                on_leave += 1
            elif kind == AttendanceStatus.ABSENT:
                absent += 1
            else:
                present += 1
                if kind == AttendanceStatus.LATE:
                    late += 1

        return AttendanceOverview(
            day=day,
            total_employees=len(roster),
            present_today=present,
            late_today=late,
            on_leave_today=on_leave,
            absent_today=absent,
        )
