from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import require_non_empty
from ..core.enums import LeaveStatus
from ..core.exceptions import InvalidStateTransition, NotFound, ValidationError
from ..employees.repository import EmployeeRepository
from .model import LeaveRequest
from .repository import LeaveRepository

logger = logging.getLogger(__name__)


class LeaveService:
    """Use case: submit and decide leave requests; answer coverage queries."""

    def __init__(
        self,
        leaves: LeaveRepository,
        employees: EmployeeRepository,
        *,
        clock: Callable[[], datetime] = now_local,
    ):
        self._leaves = leaves
        self._employees = employees
        self._clock = clock

    def submit(
        self,
        *,
        employee_id: int,
        leave_type: str,
        start_date: date,
        end_date: date,
        reason: str,
    ) -> LeaveRequest:
        if not self._employees.get_by_id(int(employee_id)):
            raise NotFound(f"Employee {employee_id} not found")
        if end_date < start_date:
            raise ValidationError("Leave end date must be on or after start date")

        leave_type = require_non_empty(leave_type, "Leave type")
        reason = require_non_empty(reason, "Reason")
        request_id = self._leaves.create(
            employee_id=int(employee_id),
            leave_type=leave_type,
            start_date=start_date,
            end_date=end_date,
            reason=reason,
            request_date=self._clock(),
        )
        logger.info("leave request %s submitted by employee %s", request_id, employee_id)
        return self.get(request_id)

    def get(self, request_id: int) -> LeaveRequest:
        req = self._leaves.get_by_id(int(request_id))
        if not req:
            raise NotFound(f"Leave request {request_id} not found")
        return req

    def approve(self, *, request_id: int, actor: str) -> LeaveRequest:
        return self._decide(request_id=request_id, status=LeaveStatus.APPROVED, actor=actor)

    def reject(self, *, request_id: int, actor: str) -> LeaveRequest:
        return self._decide(request_id=request_id, status=LeaveStatus.REJECTED, actor=actor)

    def _decide(self, *, request_id: int, status: LeaveStatus, actor: str) -> LeaveRequest:
        req = self.get(request_id)
        if req.status != LeaveStatus.PENDING:
            raise InvalidStateTransition(f"Leave request {request_id} is already {req.status.value}")

        ok = self._leaves.decide(
            request_id=int(request_id),
            status=status,
            decided_by=actor,
            decided_at=self._clock(),
        )
        if not ok:
            raise InvalidStateTransition(f"Leave request {request_id} was decided concurrently")
        logger.info("leave request %s %s by %s", request_id, status.value, actor)
        return self.get(request_id)

    def list_for_employee(self, employee_id: int) -> Sequence[LeaveRequest]:
        return self._leaves.list_requests(employee_id=int(employee_id))

    def list_all(self, *, status: Optional[LeaveStatus] = None) -> Sequence[LeaveRequest]:
        return self._leaves.list_requests(status=status, limit=500)

    def approved_covering(self, day: date) -> Sequence[LeaveRequest]:
        return self._leaves.list_approved_overlapping(start_date=day, end_date=day)

    def approved_overlapping(
        self,
        start_date: date,
        end_date: date,
        *,
        employee_id: Optional[int] = None,
    ) -> Sequence[LeaveRequest]:
        return self._leaves.list_approved_overlapping(
            start_date=start_date,
            end_date=end_date,
            employee_id=employee_id,
        )
