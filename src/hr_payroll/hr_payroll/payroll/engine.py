from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from ..attendance.service import AttendanceService
from ..common.validators import require_period
from ..components.service import SalaryComponentCatalog
from ..core.exceptions import NoActiveEmployees
from ..employees.repository import EmployeeRepository
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import PayrollRunDraft

logger = logging.getLogger(__name__)


class PayrollComputationEngine:
    """Computes draft payrolls. Pure read path: nothing here writes to the store."""

    def __init__(
        self,
        employees: EmployeeRepository,
        catalog: SalaryComponentCatalog,
        attendance: AttendanceService,
        *,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._employees = employees
        self._catalog = catalog
        self._attendance = attendance
        self._calculator = calculator or StandardPayrollCalculator()

    def compute_draft(self, pay_period_start: date, pay_period_end: date) -> PayrollRunDraft:
        require_period(pay_period_start, pay_period_end)

        roster = sorted(self._employees.list_active(), key=lambda e: e.employee_id)
        if not roster:
            raise NoActiveEmployees("No active employees to pay")

        components = self._catalog.list()
        summaries = self._attendance.summarize_roster(
            [e.employee_id for e in roster], start=pay_period_start, end=pay_period_end
        )

        paychecks = tuple(
            self._calculator.calculate(employee=e, components=components, attendance=summaries[e.employee_id])
            for e in roster
        )
        draft = PayrollRunDraft.build(
            pay_period_start=pay_period_start,
            pay_period_end=pay_period_end,
            paychecks=paychecks,
        )
        logger.debug(
            "computed draft %s..%s employees=%d net=%s",
            pay_period_start,
            pay_period_end,
            len(paychecks),
            draft.total_net_pay,
        )
        return draft
