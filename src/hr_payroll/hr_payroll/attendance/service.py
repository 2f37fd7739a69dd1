from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date, datetime
from typing import Callable, Iterable, Optional, Sequence

from ..common.datetime_utils import iter_dates, now_local
from ..core.enums import AttendanceStatus
from ..core.exceptions import NotFound, ValidationError
from ..employees.repository import EmployeeRepository
from ..leave.model import LeaveRequest
from ..leave.repository import LeaveRepository
from .classifier import classify_day
from .factory import AttendanceStrategyFactory
from .model import AttendanceRecord, AttendanceSummary
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


def summarize_period(
    employee_id: int,
    start: date,
    end: date,
    records: Iterable[AttendanceRecord],
    approved_leaves: Iterable[LeaveRequest],
) -> AttendanceSummary:
    """Fold one employee's records and approved leave into period counts.

    Days are classified exactly as in the daily overview, so an absent record on
    a leave day is excused. Days with neither a record nor approved leave are not
    counted at all.
    """
    by_day = {r.work_date: r for r in records if r.employee_id == employee_id}
    leaves = [lv for lv in approved_leaves if lv.employee_id == employee_id and lv.is_approved]

    present = late = absent = on_leave = 0
    for day in iter_dates(start, end):
        rec = by_day.get(day)
        covered = any(lv.covers(day) for lv in leaves)
        if rec is None and not covered:
            continue
        kind = classify_day(rec.status if rec else None, on_approved_leave=covered)
        if kind == AttendanceStatus.ON_LEAVE:
            on_leave += 1
        elif kind == AttendanceStatus.ABSENT:
            absent += 1
        else:
            present += 1
            if kind == AttendanceStatus.LATE:
                late += 1

    return AttendanceSummary(
        employee_id=employee_id,
        period_start=start,
        period_end=end,
        present_days=present,
        late_days=late,
        absent_days=absent,
        leave_days=on_leave,
    )


class AttendanceService:
    """Attendance ledger: clock-in/out writes and per-period reads."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        leaves: LeaveRepository,
        *,
        strategy_factory: AttendanceStrategyFactory | None = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._attendance = attendance
        self._employees = employees
        self._leaves = leaves
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._clock = clock

    def today(self) -> date:
        return self._clock().date()

    def clock_in(self, employee_id: int, *, now: datetime | None = None) -> AttendanceRecord:
        now = now or self._clock()
        today = now.date()

        employee = self._employees.get_by_id(int(employee_id))
        if not employee or not employee.is_active:
            raise NotFound(f"Active employee {employee_id} not found")

        if self._attendance.get_for_employee_and_date(employee.employee_id, today):
            raise ValidationError("Already clocked in today")

        clock_in = now.time().replace(microsecond=0)
        decision = self._factory.for_clock_in(clock_in=clock_in).decide(clock_in=clock_in)
        attendance_id = self._attendance.create(
            employee_id=employee.employee_id,
            work_date=today,
            clock_in_time=clock_in,
            status=decision.status,
            remarks=decision.note,
        )
        logger.info("employee %s clocked in on %s as %s", employee_id, today, decision.status.value)
        return self._require(attendance_id)

    def clock_out(self, employee_id: int, *, now: datetime | None = None) -> AttendanceRecord:
        now = now or self._clock()
        today = now.date()

        record = self._attendance.get_for_employee_and_date(int(employee_id), today)
        if not record or record.clock_in_time is None:
            raise ValidationError("No clock-in recorded today")
        if record.clock_out_time is not None:
            raise ValidationError("Already clocked out today")

        self._attendance.update_clock_out(
            attendance_id=record.attendance_id,
            clock_out_time=now.time().replace(microsecond=0),
        )
        return self._require(record.attendance_id)

    def update_remarks(self, attendance_id: int, remarks: Optional[str]) -> AttendanceRecord:
        remarks = (remarks or "").strip() or None
        if not self._attendance.update_remarks(attendance_id=int(attendance_id), remarks=remarks):
            raise NotFound(f"Attendance record {attendance_id} not found")
        return self._require(attendance_id)

    def history(self, employee_id: int, *, start: date, end: date) -> Sequence[AttendanceRecord]:
        return self._attendance.list_for_range(start_date=start, end_date=end, employee_id=int(employee_id))

    def mark_absentees(self, work_date: date) -> list[int]:
        """Create ABSENT records for active employees with no record and no approved leave."""
        recorded = {r.employee_id for r in self._attendance.list_for_date(work_date)}
        on_leave = {
            lv.employee_id
            for lv in self._leaves.list_approved_overlapping(start_date=work_date, end_date=work_date)
        }

        marked: list[int] = []
        for employee in self._employees.list_active():
            if employee.employee_id in recorded or employee.employee_id in on_leave:
                continue
            self._attendance.create(
                employee_id=employee.employee_id,
                work_date=work_date,
                clock_in_time=None,
                status=AttendanceStatus.ABSENT,
                remarks="No clock-in recorded",
            )
            marked.append(employee.employee_id)

        logger.info("marked %s absentees for %s", len(marked), work_date)
        return marked

    def summarize_roster(self, employee_ids: Iterable[int], *, start: date, end: date) -> dict[int, AttendanceSummary]:
        """Period summaries for many employees from two bulk reads."""
        records_by_employee: dict[int, list[AttendanceRecord]] = defaultdict(list)
        for r in self._attendance.list_for_range(start_date=start, end_date=end):
            records_by_employee[r.employee_id].append(r)

        leaves_by_employee: dict[int, list[LeaveRequest]] = defaultdict(list)
        for lv in self._leaves.list_approved_overlapping(start_date=start, end_date=end):
            leaves_by_employee[lv.employee_id].append(lv)

        return {
            eid: summarize_period(eid, start, end, records_by_employee[eid], leaves_by_employee[eid])
            for eid in employee_ids
        }

    def _require(self, attendance_id: int) -> AttendanceRecord:
        record = self._attendance.get_by_id(int(attendance_id))
        if not record:
            raise NotFound(f"Attendance record {attendance_id} not found")
        return record
