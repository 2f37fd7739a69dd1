from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Closed set of caller roles checked at the API boundary."""

    ADMIN = "admin"
    USER = "user"


class AttendanceStatus(str, Enum):
    """Daily attendance status stored per employee and date."""

    PRESENT = "PRESENT"
    LATE = "LATE"
    ABSENT = "ABSENT"
    ON_LEAVE = "ON_LEAVE"


class LeaveStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class ComponentKind(str, Enum):
    """Kind of a configured salary component."""

    EARNING = "EARNING"
    DEDUCTION = "DEDUCTION"
    TAX = "TAX"


class PayrollStatus(str, Enum):
    """Lifecycle of a payroll run and of its paychecks."""

    DRAFT = "DRAFT"
    APPROVED = "APPROVED"
    PAID = "PAID"
