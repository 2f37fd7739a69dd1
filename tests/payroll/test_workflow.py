import threading
import time
from datetime import date
from types import SimpleNamespace
from decimal import Decimal

import pytest

from src.hr_payroll.hr_payroll.container import wire_container
from src.hr_payroll.hr_payroll.core.enums import PayrollStatus
from src.hr_payroll.hr_payroll.core.exceptions import (
    ConcurrentModification,
    ImmutableRunError,
    InvalidStateTransition,
    NotFound,
    SelfApprovalForbidden,
)
from src.hr_payroll.hr_payroll.payroll.locks import KeyedLockRegistry
from src.hr_payroll.hr_payroll.payroll.workflow import PayrollRunWorkflow

START = date(2024, 3, 1)
END = date(2024, 3, 31)


@pytest.fixture
def workflow(container, employees, standard_components, new_employee):
    employees.add(new_employee(1, "10000"))
    employees.add(new_employee(2, "8000"))
    return container.payroll_workflow


def test_preview_tags_preparer_and_writes_nothing(workflow, payroll_runs):
    draft = workflow.preview(START, END, "alice")

    assert draft.prepared_by == "alice"
    assert payroll_runs.by_id == {}


def test_self_approval_is_refused_then_other_admin_succeeds(workflow, payroll_runs, fixed_now):
    draft = workflow.preview(START, END, "alice")

    with pytest.raises(SelfApprovalForbidden):
        workflow.finalize(draft, "alice")
    assert payroll_runs.by_id == {}

    run = workflow.finalize(draft, "bob")

    assert run.status == PayrollStatus.APPROVED
    assert (run.prepared_by, run.approved_by) == ("alice", "bob")
    assert run.processed_at == fixed_now
    assert all(p.status == PayrollStatus.APPROVED for p in run.paychecks)
    assert workflow.get_run(run.run_id).total_net_pay == draft.total_net_pay


def test_paid_run_cannot_be_deleted(workflow):
    run = workflow.finalize(workflow.preview(START, END, "alice"), "bob")

    paid = workflow.mark_paid(run.run_id, "carol")

    assert paid.status == PayrollStatus.PAID
    assert paid.paid_by == "carol"
    assert paid.paid_at is not None
    assert all(p.status == PayrollStatus.PAID for p in paid.paychecks)
    with pytest.raises(ImmutableRunError):
        workflow.delete_run(run.run_id, "bob")
    with pytest.raises(InvalidStateTransition):
        workflow.mark_paid(run.run_id, "carol")


def test_delete_approved_run(workflow):
    run = workflow.finalize(workflow.preview(START, END, "alice"), "bob")

    workflow.delete_run(run.run_id, "bob")

    with pytest.raises(NotFound):
        workflow.get_run(run.run_id)


def test_unknown_run_is_not_found(workflow):
    with pytest.raises(NotFound):
        workflow.mark_paid(404, "bob")


def test_duplicate_finalize_is_rejected(workflow, payroll_runs):
    draft = workflow.preview(START, END, "alice")
    workflow.finalize(draft, "bob")

    with pytest.raises(ConcurrentModification):
        workflow.finalize(draft, "carol")
    assert len(payroll_runs.by_id) == 1


def test_concurrent_finalize_only_one_wins(workflow, payroll_runs):
    draft = workflow.preview(START, END, "alice")
    outcomes = []

    def approve(actor):
        try:
            workflow.finalize(draft, actor)
            outcomes.append("ok")
        except ConcurrentModification:
            outcomes.append("conflict")

    threads = [threading.Thread(target=approve, args=(a,)) for a in ("bob", "carol", "dave")]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert sorted(outcomes) == ["conflict", "conflict", "ok"]
    assert len(payroll_runs.by_id) == 1


def test_list_runs_newest_period_first(workflow):
    jan = workflow.finalize(workflow.preview(date(2024, 1, 1), date(2024, 1, 31), "alice"), "bob")
    mar = workflow.finalize(workflow.preview(START, END, "alice"), "bob")
    mar_again = workflow.finalize(workflow.preview(START, END, "dave"), "bob")

    runs = workflow.list_runs()

    assert [r.run_id for r in runs] == [mar_again.run_id, mar.run_id, jan.run_id]
    assert runs[0].paychecks == ()
    assert runs[0].employee_count == 2


def test_stale_version_is_concurrent_modification(workflow, payroll_runs, monkeypatch):
    run = workflow.finalize(workflow.preview(START, END, "alice"), "bob")
    monkeypatch.setattr(payroll_runs, "update_status", lambda **kwargs: False)

    with pytest.raises(ConcurrentModification):
        workflow.mark_paid(run.run_id, "bob")
    assert workflow.get_run(run.run_id).status == PayrollStatus.APPROVED


def test_lock_timeout_is_concurrent_modification(container, payroll_runs, employees, new_employee):
    employees.add(new_employee(1))
    locks = KeyedLockRegistry(timeout=0.05)
    workflow = PayrollRunWorkflow(container.payroll_engine, payroll_runs, locks=locks)
    run = workflow.finalize(workflow.preview(START, END, "alice"), "bob")

    with locks.hold(("run", run.run_id)):
        with pytest.raises(ConcurrentModification):
            workflow.mark_paid(run.run_id, "bob")

    assert workflow.mark_paid(run.run_id, "bob").status == PayrollStatus.PAID


def test_run_totals_match_paychecks(workflow):
    run = workflow.finalize(workflow.preview(START, END, "alice"), "bob")

    assert run.total_net_pay == sum((p.net_pay for p in run.paychecks), Decimal("0"))
    assert run.employee_count == 2


def test_configured_lock_timeout_is_used(employees, components, attendance, leaves, payroll_runs, new_employee):
    employees.add(new_employee(1))
    container = wire_container(
        employees_repo=employees,
        components_repo=components,
        attendance_repo=attendance,
        leave_repo=leaves,
        payroll_repo=payroll_runs,
        settings=SimpleNamespace(LOCK_TIMEOUT_SECONDS=0.05),
    )
    workflow = container.payroll_workflow
    run = workflow.finalize(workflow.preview(START, END, "alice"), "bob")

    started = time.monotonic()
    with container.lock_registry.hold(("run", run.run_id)):
        with pytest.raises(ConcurrentModification):
            workflow.delete_run(run.run_id, "bob")

    assert time.monotonic() - started < 2
    assert workflow.get_run(run.run_id).status == PayrollStatus.APPROVED
