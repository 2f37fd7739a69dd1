from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from ..core.enums import Role


@dataclass(frozen=True)
class Employee:
    """Domain entity: an employee on the payroll roster.

    Owned by the user-management subsystem; the payroll engine only reads it.
    """

    employee_id: int
    username: str
    full_name: str
    base_salary: Decimal
    role: Role = Role.USER
    is_active: bool = True
