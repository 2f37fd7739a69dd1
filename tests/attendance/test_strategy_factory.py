from datetime import time

import pytest

from src.hr_payroll.hr_payroll.attendance.factory import AttendanceStrategyFactory
from src.hr_payroll.hr_payroll.attendance.strategies.absent_strategy import AbsentStrategy
from src.hr_payroll.hr_payroll.attendance.strategies.late_strategy import LateStrategy
from src.hr_payroll.hr_payroll.attendance.strategies.present_strategy import PresentStrategy
from src.hr_payroll.hr_payroll.core.enums import AttendanceStatus


@pytest.mark.parametrize(
    "clock_in, expected",
    [
        (time(7, 55), PresentStrategy),
        (time(8, 30), PresentStrategy),
        (time(8, 31), LateStrategy),
        (time(14, 0), LateStrategy),
        (time(14, 1), AbsentStrategy),
    ],
)
def test_factory_picks_strategy_by_cutoff(clock_in, expected):
    factory = AttendanceStrategyFactory()

    assert isinstance(factory.for_clock_in(clock_in=clock_in), expected)


def test_custom_cutoffs():
    factory = AttendanceStrategyFactory(late_cutoff=time(9, 0), absent_cutoff=time(12, 0))

    assert isinstance(factory.for_clock_in(clock_in=time(8, 45)), PresentStrategy)
    assert isinstance(factory.for_clock_in(clock_in=time(12, 30)), AbsentStrategy)


def test_late_decision_carries_note():
    decision = LateStrategy(time(8, 30)).decide(clock_in=time(9, 5))

    assert decision.status == AttendanceStatus.LATE
    assert "09:05" in decision.note
