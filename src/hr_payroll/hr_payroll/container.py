from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Optional

from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.overview import AttendanceOverviewAggregator
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .common.datetime_utils import now_local, parse_hhmm
from .components.mysql_component_repository import MySQLSalaryComponentRepository
from .components.repository import SalaryComponentRepository
from .components.service import SalaryComponentCatalog
from .core import constants
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .leave.mysql_leave_repository import MySQLLeaveRepository
from .leave.repository import LeaveRepository
from .leave.service import LeaveService
from .payroll.calculator.standard_calculator import StandardPayrollCalculator
from .payroll.draft_store import DraftStore
from .payroll.engine import PayrollComputationEngine
from .payroll.locks import KeyedLockRegistry
from .payroll.mysql_payroll_repository import MySQLPayrollRunRepository
from .payroll.penalties import build_penalty_policy
from .payroll.repository import PayrollRunRepository
from .payroll.workflow import PayrollRunWorkflow


@dataclass(frozen=True)
class Container:
    employees_repo: EmployeeRepository
    components_repo: SalaryComponentRepository
    attendance_repo: AttendanceRepository
    leave_repo: LeaveRepository
    payroll_repo: PayrollRunRepository

    component_catalog: SalaryComponentCatalog
    attendance_service: AttendanceService
    overview_aggregator: AttendanceOverviewAggregator
    leave_service: LeaveService
    payroll_engine: PayrollComputationEngine
    payroll_workflow: PayrollRunWorkflow
    draft_store: DraftStore
    lock_registry: KeyedLockRegistry

    conn: Optional[DatabaseConnection] = None


def _setting(settings: Any, name: str, default: Any) -> Any:
    if settings is None:
        return default
    return getattr(settings, name, default)


def wire_container(
    *,
    employees_repo: EmployeeRepository,
    components_repo: SalaryComponentRepository,
    attendance_repo: AttendanceRepository,
    leave_repo: LeaveRepository,
    payroll_repo: PayrollRunRepository,
    settings: Any = None,
    conn: Optional[DatabaseConnection] = None,
    clock: Callable[[], datetime] = now_local,
) -> Container:
    """Build services on top of the given repositories.

    ``settings`` is any object exposing the config module attributes; missing
    ones fall back to the defaults in ``core.constants``.
    """
    late_cutoff = _setting(settings, "LATE_CUTOFF", None)
    absent_cutoff = _setting(settings, "ABSENT_CUTOFF", None)
    strategy_factory = AttendanceStrategyFactory(
        late_cutoff=parse_hhmm(late_cutoff) if late_cutoff else constants.DEFAULT_LATE_CUTOFF,
        absent_cutoff=parse_hhmm(absent_cutoff) if absent_cutoff else constants.DEFAULT_ABSENT_CUTOFF,
    )

    calculator = StandardPayrollCalculator(
        penalty_policy=build_penalty_policy(
            _setting(settings, "ABSENCE_PENALTY", "none"),
            per_absence=_setting(settings, "ABSENCE_PENALTY_PER_DAY", "0"),
            per_late=_setting(settings, "LATE_PENALTY_PER_DAY", "0"),
        ),
        provident_fund_names=_setting(settings, "PROVIDENT_FUND_NAMES", constants.DEFAULT_PROVIDENT_FUND_NAMES),
        places=int(_setting(settings, "CURRENCY_PLACES", constants.DEFAULT_CURRENCY_PLACES)),
    )

    component_catalog = SalaryComponentCatalog(components_repo, clock=clock)
    attendance_service = AttendanceService(
        attendance_repo,
        employees_repo,
        leave_repo,
        strategy_factory=strategy_factory,
        clock=clock,
    )
    overview_aggregator = AttendanceOverviewAggregator(employees_repo, attendance_repo, leave_repo)
    leave_service = LeaveService(leave_repo, employees_repo, clock=clock)
    payroll_engine = PayrollComputationEngine(
        employees_repo,
        component_catalog,
        attendance_service,
        calculator=calculator,
    )
    lock_registry = KeyedLockRegistry(
        timeout=float(_setting(settings, "LOCK_TIMEOUT_SECONDS", constants.DEFAULT_LOCK_TIMEOUT_SECONDS))
    )
    payroll_workflow = PayrollRunWorkflow(payroll_engine, payroll_repo, locks=lock_registry, clock=clock)
    draft_store = DraftStore(
        ttl_seconds=float(_setting(settings, "DRAFT_TTL_SECONDS", constants.DEFAULT_DRAFT_TTL_SECONDS))
    )

    return Container(
        employees_repo=employees_repo,
        components_repo=components_repo,
        attendance_repo=attendance_repo,
        leave_repo=leave_repo,
        payroll_repo=payroll_repo,
        component_catalog=component_catalog,
        attendance_service=attendance_service,
        overview_aggregator=overview_aggregator,
        leave_service=leave_service,
        payroll_engine=payroll_engine,
        payroll_workflow=payroll_workflow,
        draft_store=draft_store,
        lock_registry=lock_registry,
        conn=conn,
    )


def build_container(*, db_config: dict, settings: Any = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return wire_container(
        employees_repo=MySQLEmployeeRepository(conn),
        components_repo=MySQLSalaryComponentRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        leave_repo=MySQLLeaveRepository(conn),
        payroll_repo=MySQLPayrollRunRepository(conn),
        settings=settings,
        conn=conn,
    )
