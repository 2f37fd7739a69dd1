from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..common.money import ZERO
from ..core.enums import ComponentKind, PayrollStatus


@dataclass(frozen=True)
class PaycheckLine:
    """One itemized amount on a payslip (base pay, a component or a penalty)."""

    name: str
    kind: ComponentKind
    amount: Decimal


@dataclass(frozen=True)
class Paycheck:
    """Pay computed for one employee inside a payroll run.

    ``gross_pay = base_pay + commission_amount`` and ``net_pay = gross_pay -
    total_deductions``; penalties are part of ``other_deductions``.
    """

    employee_id: int
    employee_username: str
    base_pay: Decimal
    gross_pay: Decimal
    commission_amount: Decimal
    tax_deduction: Decimal
    provident_fund_deduction: Decimal
    other_deductions: Decimal
    total_deductions: Decimal
    net_pay: Decimal
    status: PayrollStatus = PayrollStatus.DRAFT
    late_penalty_deduction: Decimal = ZERO
    absent_penalty_deduction: Decimal = ZERO
    lines: tuple[PaycheckLine, ...] = ()

    def with_status(self, status: PayrollStatus) -> "Paycheck":
        return replace(self, status=status)


def _total(values) -> Decimal:
    return sum(values, ZERO)


@dataclass(frozen=True)
class PayrollRunDraft:
    """Unpersisted payroll preview held by the caller until finalize.

    Carries no timestamps, so two previews over unchanged data compare equal.
    """

    pay_period_start: date
    pay_period_end: date
    paychecks: tuple[Paycheck, ...]
    total_gross_pay: Decimal
    total_deductions: Decimal
    total_net_pay: Decimal
    prepared_by: Optional[str] = None

    @classmethod
    def build(
        cls,
        *,
        pay_period_start: date,
        pay_period_end: date,
        paychecks: tuple[Paycheck, ...],
        prepared_by: Optional[str] = None,
    ) -> "PayrollRunDraft":
        return cls(
            pay_period_start=pay_period_start,
            pay_period_end=pay_period_end,
            paychecks=paychecks,
            total_gross_pay=_total(p.gross_pay for p in paychecks),
            total_deductions=_total(p.total_deductions for p in paychecks),
            total_net_pay=_total(p.net_pay for p in paychecks),
            prepared_by=prepared_by,
        )


@dataclass(frozen=True)
class PayrollRun:
    """Persisted payroll run. Immutable once APPROVED except for the PAID move."""

    run_id: int
    pay_period_start: date
    pay_period_end: date
    status: PayrollStatus
    prepared_by: str
    processed_at: datetime
    total_gross_pay: Decimal
    total_deductions: Decimal
    total_net_pay: Decimal
    approved_by: Optional[str] = None
    paid_by: Optional[str] = None
    paid_at: Optional[datetime] = None
    paychecks: tuple[Paycheck, ...] = ()
    employee_count: int = 0
    version: int = 1
