from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import range_contains
from ..core.enums import LeaveStatus


@dataclass(frozen=True)
class LeaveRequest:
    request_id: int
    employee_id: int
    leave_type: str
    start_date: date
    end_date: date
    reason: str
    status: LeaveStatus
    request_date: datetime
    decided_by: Optional[str] = None
    decided_at: Optional[datetime] = None

    def covers(self, day: date) -> bool:
        return range_contains(self.start_date, self.end_date, day)

    @property
    def is_approved(self) -> bool:
        return self.status == LeaveStatus.APPROVED
