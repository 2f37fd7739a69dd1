from datetime import date
from decimal import Decimal

import pytest

from src.hr_payroll.hr_payroll.attendance.model import AttendanceSummary
from src.hr_payroll.hr_payroll.core.enums import ComponentKind
from src.hr_payroll.hr_payroll.core.exceptions import ComponentConfigError
from src.hr_payroll.hr_payroll.payroll.calculator.standard_calculator import StandardPayrollCalculator
from src.hr_payroll.hr_payroll.payroll.penalties import (
    DailyRateAbsencePenalty,
    FlatAbsencePenalty,
    NoAbsencePenalty,
    build_penalty_policy,
)


def _summary(absent=0, late=0):
    return AttendanceSummary(
        employee_id=1,
        period_start=date(2024, 3, 1),
        period_end=date(2024, 3, 31),
        present_days=10,
        late_days=late,
        absent_days=absent,
    )


def test_default_policy_charges_nothing(new_employee):
    p = StandardPayrollCalculator().calculate(employee=new_employee(1, "3100"), components=[], attendance=_summary(absent=3))

    assert p.absent_penalty_deduction == Decimal("0")
    assert p.net_pay == Decimal("3100.00")


def test_daily_rate_penalty(new_employee):
    calc = StandardPayrollCalculator(penalty_policy=DailyRateAbsencePenalty())

    p = calc.calculate(employee=new_employee(1, "3100"), components=[], attendance=_summary(absent=2))

    assert p.absent_penalty_deduction == Decimal("200.00")
    assert p.other_deductions == Decimal("200.00")
    assert p.net_pay == Decimal("2900.00")
    assert p.lines[-1].name == "Absence Penalty"


def test_flat_penalty_counts_late_days(new_employee):
    calc = StandardPayrollCalculator(penalty_policy=FlatAbsencePenalty(per_absence=Decimal("50"), per_late=Decimal("10")))

    p = calc.calculate(employee=new_employee(1, "3000"), components=[], attendance=_summary(absent=2, late=3))

    assert p.absent_penalty_deduction == Decimal("100.00")
    assert p.late_penalty_deduction == Decimal("30.00")
    assert p.total_deductions == Decimal("130.00")


def test_penalties_never_push_net_below_zero(new_employee, new_component):
    calc = StandardPayrollCalculator(penalty_policy=FlatAbsencePenalty(per_absence=Decimal("5000"), per_late=Decimal("5000")))
    components = [new_component("Income Tax", ComponentKind.TAX, "10", component_id=1)]

    p = calc.calculate(employee=new_employee(1, "1000"), components=components, attendance=_summary(absent=1, late=1))

    assert p.absent_penalty_deduction == Decimal("900.00")
    assert p.late_penalty_deduction == Decimal("0.00")
    assert p.net_pay == Decimal("0.00")


@pytest.mark.parametrize(
    "mode, expected",
    [("none", NoAbsencePenalty), ("DAILY_RATE", DailyRateAbsencePenalty), ("flat", FlatAbsencePenalty)],
)
def test_build_penalty_policy(mode, expected):
    assert isinstance(build_penalty_policy(mode, per_absence="25", per_late="5"), expected)


def test_build_penalty_policy_rejects_unknown_mode():
    with pytest.raises(ComponentConfigError):
        build_penalty_policy("hourly")
