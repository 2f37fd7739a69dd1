from __future__ import annotations

import threading
from dataclasses import replace
from datetime import date, datetime, time
from decimal import Decimal
from typing import Optional

import pytest

from src.hr_payroll.hr_payroll.attendance.model import AttendanceRecord
from src.hr_payroll.hr_payroll.components.model import SalaryComponent
from src.hr_payroll.hr_payroll.container import wire_container
from src.hr_payroll.hr_payroll.core.enums import ComponentKind, LeaveStatus, PayrollStatus, Role
from src.hr_payroll.hr_payroll.employees.model import Employee
from src.hr_payroll.hr_payroll.leave.model import LeaveRequest
from src.hr_payroll.hr_payroll.payroll.model import PayrollRun


class InMemoryEmployees:
    def __init__(self, employees=()):
        self.by_id: dict[int, Employee] = {e.employee_id: e for e in employees}

    def add(self, employee: Employee) -> Employee:
        self.by_id[employee.employee_id] = employee
        return employee

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self.by_id.get(employee_id)

    def list_active(self):
        return [e for _, e in sorted(self.by_id.items()) if e.is_active]


class InMemoryComponents:
    def __init__(self):
        self.by_id: dict[int, SalaryComponent] = {}
        self._id = 0

    def list_all(self, *, kind=None):
        return [c for _, c in sorted(self.by_id.items()) if kind is None or c.kind == kind]

    def get_by_id(self, component_id: int):
        return self.by_id.get(component_id)

    def insert(self, component: SalaryComponent) -> int:
        self._id += 1
        self.by_id[self._id] = replace(component, component_id=self._id)
        return self._id

    def update(self, component: SalaryComponent) -> bool:
        if component.component_id not in self.by_id:
            return False
        self.by_id[component.component_id] = component
        return True

    def delete(self, component_id: int) -> bool:
        return self.by_id.pop(component_id, None) is not None


class InMemoryAttendance:
    def __init__(self):
        self.by_id: dict[int, AttendanceRecord] = {}
        self._id = 0

    def get_for_employee_and_date(self, employee_id: int, work_date: date):
        for r in self.by_id.values():
            if r.employee_id == employee_id and r.work_date == work_date:
                return r
        return None

    def get_by_id(self, attendance_id: int):
        return self.by_id.get(attendance_id)

    def list_for_date(self, work_date: date):
        return [r for r in self.by_id.values() if r.work_date == work_date]

    def list_for_range(self, *, start_date: date, end_date: date, employee_id=None):
        return [
            r
            for r in self.by_id.values()
            if start_date <= r.work_date <= end_date and (employee_id is None or r.employee_id == employee_id)
        ]

    def create(self, *, employee_id, work_date, clock_in_time, status, remarks=None) -> int:
        self._id += 1
        self.by_id[self._id] = AttendanceRecord(
            attendance_id=self._id,
            employee_id=employee_id,
            work_date=work_date,
            clock_in_time=clock_in_time,
            clock_out_time=None,
            status=status,
            remarks=remarks,
        )
        return self._id

    def update_clock_out(self, *, attendance_id: int, clock_out_time: time) -> bool:
        rec = self.by_id.get(attendance_id)
        if not rec:
            return False
        self.by_id[attendance_id] = replace(rec, clock_out_time=clock_out_time)
        return True

    def update_remarks(self, *, attendance_id: int, remarks) -> bool:
        rec = self.by_id.get(attendance_id)
        if not rec:
            return False
        self.by_id[attendance_id] = replace(rec, remarks=remarks)
        return True


class InMemoryLeaves:
    def __init__(self):
        self.by_id: dict[int, LeaveRequest] = {}
        self._id = 0

    def create(self, *, employee_id, leave_type, start_date, end_date, reason, request_date) -> int:
        self._id += 1
        self.by_id[self._id] = LeaveRequest(
            request_id=self._id,
            employee_id=employee_id,
            leave_type=leave_type,
            start_date=start_date,
            end_date=end_date,
            reason=reason,
            status=LeaveStatus.PENDING,
            request_date=request_date,
        )
        return self._id

    def add_approved(self, employee_id: int, start_date: date, end_date: date) -> LeaveRequest:
        request_id = self.create(
            employee_id=employee_id,
            leave_type="Annual",
            start_date=start_date,
            end_date=end_date,
            reason="holiday",
            request_date=datetime(2024, 1, 1, 9, 0),
        )
        self.by_id[request_id] = replace(self.by_id[request_id], status=LeaveStatus.APPROVED, decided_by="hr")
        return self.by_id[request_id]

    def get_by_id(self, request_id: int):
        return self.by_id.get(request_id)

    def list_requests(self, *, status=None, employee_id=None, limit=200):
        items = [
            r
            for r in self.by_id.values()
            if (status is None or r.status == status) and (employee_id is None or r.employee_id == employee_id)
        ]
        items.sort(key=lambda r: r.request_id, reverse=True)
        return items[:limit]

    def list_approved_overlapping(self, *, start_date, end_date, employee_id=None):
        return [
            r
            for r in self.by_id.values()
            if r.status == LeaveStatus.APPROVED
            and r.start_date <= end_date
            and r.end_date >= start_date
            and (employee_id is None or r.employee_id == employee_id)
        ]

    def decide(self, *, request_id, status, decided_by, decided_at) -> bool:
        req = self.by_id.get(request_id)
        if not req or req.status != LeaveStatus.PENDING:
            return False
        self.by_id[request_id] = replace(req, status=status, decided_by=decided_by, decided_at=decided_at)
        return True


class InMemoryPayrollRuns:
    def __init__(self):
        self.by_id: dict[int, PayrollRun] = {}
        self._id = 0
        self._lock = threading.Lock()

    def insert_run(self, run: PayrollRun):
        with self._lock:
            for existing in self.by_id.values():
                if (
                    existing.pay_period_start == run.pay_period_start
                    and existing.pay_period_end == run.pay_period_end
                    and existing.prepared_by == run.prepared_by
                    and existing.status in (PayrollStatus.APPROVED, PayrollStatus.PAID)
                ):
                    return None
            self._id += 1
            self.by_id[self._id] = replace(run, run_id=self._id)
            return self._id

    def get_run(self, run_id: int):
        return self.by_id.get(run_id)

    def list_runs(self):
        runs = [replace(r, paychecks=(), employee_count=len(r.paychecks)) for r in self.by_id.values()]
        runs.sort(key=lambda r: (r.pay_period_end, r.run_id), reverse=True)
        return runs

    def update_status(self, *, run_id, expected_version, status, paid_by=None, paid_at=None) -> bool:
        with self._lock:
            run = self.by_id.get(run_id)
            if not run or run.version != expected_version:
                return False
            self.by_id[run_id] = replace(
                run,
                status=status,
                paid_by=paid_by or run.paid_by,
                paid_at=paid_at or run.paid_at,
                paychecks=tuple(p.with_status(status) for p in run.paychecks),
                version=run.version + 1,
            )
            return True

    def delete_run(self, *, run_id, expected_version) -> bool:
        with self._lock:
            run = self.by_id.get(run_id)
            if not run or run.version != expected_version or run.status == PayrollStatus.PAID:
                return False
            del self.by_id[run_id]
            return True


def make_employee(employee_id: int, base_salary="10000", *, username=None, role=Role.USER, is_active=True) -> Employee:
    return Employee(
        employee_id=employee_id,
        username=username or f"emp{employee_id}",
        full_name=f"Employee {employee_id}",
        base_salary=Decimal(base_salary),
        role=role,
        is_active=is_active,
    )


def make_component(name, kind, amount, *, is_percentage=True, component_id=None) -> SalaryComponent:
    return SalaryComponent(
        component_id=component_id,
        name=name,
        kind=kind,
        amount=Decimal(amount),
        is_percentage=is_percentage,
    )


@pytest.fixture
def fixed_now():
    return datetime(2024, 3, 15, 8, 15, 0)


@pytest.fixture
def employees():
    return InMemoryEmployees()


@pytest.fixture
def components():
    return InMemoryComponents()


@pytest.fixture
def attendance():
    return InMemoryAttendance()


@pytest.fixture
def leaves():
    return InMemoryLeaves()


@pytest.fixture
def payroll_runs():
    return InMemoryPayrollRuns()


@pytest.fixture
def standard_components(components):
    """Income tax 15% and provident fund 7%, both on gross."""
    components.insert(make_component("Income Tax", ComponentKind.TAX, "15"))
    components.insert(make_component("Provident Fund", ComponentKind.DEDUCTION, "7"))
    return components


@pytest.fixture
def container(employees, components, attendance, leaves, payroll_runs, fixed_now):
    return wire_container(
        employees_repo=employees,
        components_repo=components,
        attendance_repo=attendance,
        leave_repo=leaves,
        payroll_repo=payroll_runs,
        clock=lambda: fixed_now,
    )


@pytest.fixture
def new_employee():
    return make_employee


@pytest.fixture
def new_component():
    return make_component
