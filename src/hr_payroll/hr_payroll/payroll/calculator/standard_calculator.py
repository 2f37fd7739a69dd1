from __future__ import annotations

from decimal import Decimal
from typing import Iterable, Optional, Sequence

from ...attendance.model import AttendanceSummary
from ...common.money import ZERO, percent_of, round_money
from ...components.model import SalaryComponent
from ...components.service import validate_component
from ...core.constants import DEFAULT_CURRENCY_PLACES, DEFAULT_PROVIDENT_FUND_NAMES
from ...core.enums import ComponentKind, PayrollStatus
from ...core.exceptions import ComponentConfigError
from ...employees.model import Employee
from ..model import Paycheck, PaycheckLine
from ..penalties import AbsencePenaltyPolicy, NoAbsencePenalty
from .base import PayrollCalculator

BASE_PAY_LINE = "Base Salary"
LATE_PENALTY_LINE = "Late Penalty"
ABSENT_PENALTY_LINE = "Absence Penalty"


def normalize_component_name(name: str) -> str:
    return " ".join((name or "").lower().split())


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule set.

    Earnings are fixed or a percentage of base pay; taxes and deductions are fixed
    or a percentage of gross pay. Every amount is rounded before it is summed so
    the paycheck totals add up exactly. Penalties are capped at what is left of
    gross pay after the other deductions.
    """

    def __init__(
        self,
        *,
        penalty_policy: Optional[AbsencePenaltyPolicy] = None,
        provident_fund_names: Iterable[str] = DEFAULT_PROVIDENT_FUND_NAMES,
        places: int = DEFAULT_CURRENCY_PLACES,
    ):
        self._penalty_policy = penalty_policy or NoAbsencePenalty()
        self._pf_names = frozenset(normalize_component_name(n) for n in provident_fund_names)
        self._places = int(places)

    def is_provident_fund(self, component: SalaryComponent) -> bool:
        return component.kind == ComponentKind.DEDUCTION and normalize_component_name(component.name) in self._pf_names

    def _amount(self, component: SalaryComponent, base: Decimal) -> Decimal:
        if component.is_percentage:
            return percent_of(base, component.amount, self._places)
        return round_money(component.amount, self._places)

    def calculate(
        self,
        *,
        employee: Employee,
        components: Sequence[SalaryComponent],
        attendance: AttendanceSummary,
    ) -> Paycheck:
        if employee.base_salary is None or employee.base_salary < ZERO:
            raise ComponentConfigError(f"Employee {employee.employee_id} has no valid base salary")
        for component in components:
            validate_component(component)

        base_pay = round_money(employee.base_salary, self._places)
        lines = [PaycheckLine(BASE_PAY_LINE, ComponentKind.EARNING, base_pay)]

        commission = ZERO
        for c in components:
            if c.kind != ComponentKind.EARNING:
                continue
            amount = self._amount(c, base_pay)
            commission += amount
            lines.append(PaycheckLine(c.name, c.kind, amount))
        gross = base_pay + commission

        tax = pf = other = ZERO
        for c in components:
            if c.kind == ComponentKind.EARNING:
                continue
            amount = self._amount(c, gross)
            if c.kind == ComponentKind.TAX:
                tax += amount
            elif self.is_provident_fund(c):
                pf += amount
            else:
                other += amount
            lines.append(PaycheckLine(c.name, c.kind, amount))

        assessment = self._penalty_policy.assess(employee=employee, summary=attendance, gross_pay=gross)
        available = max(gross - tax - pf - other, ZERO)
        absent_penalty = min(round_money(max(assessment.absent, ZERO), self._places), available)
        late_penalty = min(round_money(max(assessment.late, ZERO), self._places), available - absent_penalty)
        if absent_penalty:
            lines.append(PaycheckLine(ABSENT_PENALTY_LINE, ComponentKind.DEDUCTION, absent_penalty))
        if late_penalty:
            lines.append(PaycheckLine(LATE_PENALTY_LINE, ComponentKind.DEDUCTION, late_penalty))
        other += absent_penalty + late_penalty

        total_deductions = tax + pf + other
        return Paycheck(
            employee_id=employee.employee_id,
            employee_username=employee.username,
            base_pay=base_pay,
            gross_pay=gross,
            commission_amount=commission,
            tax_deduction=tax,
            provident_fund_deduction=pf,
            other_deductions=other,
            total_deductions=total_deductions,
            net_pay=gross - total_deductions,
            status=PayrollStatus.DRAFT,
            late_penalty_deduction=late_penalty,
            absent_penalty_deduction=absent_penalty,
            lines=tuple(lines),
        )
