from __future__ import annotations

from typing import Optional

from ..core.enums import AttendanceStatus


def classify_day(status: Optional[AttendanceStatus], *, on_approved_leave: bool) -> AttendanceStatus:
    """Classify one employee-day. First match wins.

    Approved leave beats any record; PRESENT and LATE count as present; anything
    else, an ON_LEAVE record without approved leave included, is an absence.
    """
    if on_approved_leave:
        return AttendanceStatus.ON_LEAVE
    if status == AttendanceStatus.PRESENT:
        return AttendanceStatus.PRESENT
    if status == AttendanceStatus.LATE:
        return AttendanceStatus.LATE
    return AttendanceStatus.ABSENT
