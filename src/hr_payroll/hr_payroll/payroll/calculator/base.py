from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from ...attendance.model import AttendanceSummary
from ...components.model import SalaryComponent
from ...employees.model import Employee
from ..model import Paycheck


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def calculate(
        self,
        *,
        employee: Employee,
        components: Sequence[SalaryComponent],
        attendance: AttendanceSummary,
    ) -> Paycheck:
        raise NotImplementedError
