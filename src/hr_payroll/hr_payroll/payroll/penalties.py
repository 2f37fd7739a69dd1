"""Absence penalty policies.

The engine charges nothing for unexcused absences unless a policy is configured;
the policies here are the pluggable hook for deployments that want one.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal

from ..attendance.model import AttendanceSummary
from ..common.datetime_utils import days_inclusive
from ..common.money import ZERO, to_decimal
from ..core.exceptions import ComponentConfigError
from ..employees.model import Employee


@dataclass(frozen=True)
class PenaltyAssessment:
    absent: Decimal = ZERO
    late: Decimal = ZERO

    @property
    def total(self) -> Decimal:
        return self.absent + self.late


class AbsencePenaltyPolicy(ABC):
    @abstractmethod
    def assess(self, *, employee: Employee, summary: AttendanceSummary, gross_pay: Decimal) -> PenaltyAssessment:
        raise NotImplementedError


class NoAbsencePenalty(AbsencePenaltyPolicy):
    def assess(self, *, employee: Employee, summary: AttendanceSummary, gross_pay: Decimal) -> PenaltyAssessment:
        return PenaltyAssessment()


class DailyRateAbsencePenalty(AbsencePenaltyPolicy):
    """Deduct one calendar day of base salary per unexcused absence."""

    def assess(self, *, employee: Employee, summary: AttendanceSummary, gross_pay: Decimal) -> PenaltyAssessment:
        if not summary.absent_days:
            return PenaltyAssessment()
        days = days_inclusive(summary.period_start, summary.period_end)
        daily_rate = employee.base_salary / Decimal(days)
        return PenaltyAssessment(absent=daily_rate * summary.absent_days)


class FlatAbsencePenalty(AbsencePenaltyPolicy):
    """Fixed amount per unexcused absence and per late day."""

    def __init__(self, *, per_absence: Decimal = ZERO, per_late: Decimal = ZERO):
        if per_absence < ZERO or per_late < ZERO:
            raise ComponentConfigError("Penalty amounts must be >= 0")
        self._per_absence = per_absence
        self._per_late = per_late

    def assess(self, *, employee: Employee, summary: AttendanceSummary, gross_pay: Decimal) -> PenaltyAssessment:
        return PenaltyAssessment(
            absent=self._per_absence * summary.absent_days,
            late=self._per_late * summary.late_days,
        )


def build_penalty_policy(mode: str, *, per_absence="0", per_late="0") -> AbsencePenaltyPolicy:
    mode = (mode or "none").strip().lower()
    if mode == "none":
        return NoAbsencePenalty()
    if mode == "daily_rate":
        return DailyRateAbsencePenalty()
    if mode == "flat":
        return FlatAbsencePenalty(
            per_absence=to_decimal(per_absence, "ABSENCE_PENALTY_PER_DAY"),
            per_late=to_decimal(per_late, "LATE_PENALTY_PER_DAY"),
        )
    raise ComponentConfigError(f"Unknown absence penalty mode: {mode!r}")
