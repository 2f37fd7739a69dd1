from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import require_non_empty
from ..core.enums import PayrollStatus
from ..core.exceptions import (
    ConcurrentModification,
    ImmutableRunError,
    InvalidStateTransition,
    NotFound,
    SelfApprovalForbidden,
    ValidationError,
)
from .engine import PayrollComputationEngine
from .locks import KeyedLockRegistry
from .model import PayrollRun, PayrollRunDraft
from .repository import PayrollRunRepository

logger = logging.getLogger(__name__)


class PayrollRunWorkflow:
    """Maker-checker lifecycle of payroll runs: DRAFT (unpersisted) -> APPROVED -> PAID.

    ``finalize`` is the only write path that creates a run. Writes are serialized
    per key in-process and guarded by the run ``version`` in the store.
    """

    def __init__(
        self,
        engine: PayrollComputationEngine,
        runs: PayrollRunRepository,
        *,
        locks: Optional[KeyedLockRegistry] = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._engine = engine
        self._runs = runs
        self._locks = locks if locks is not None else KeyedLockRegistry()
        self._clock = clock

    def preview(self, pay_period_start: date, pay_period_end: date, requested_by: str) -> PayrollRunDraft:
        requested_by = require_non_empty(requested_by, "requested_by")
        draft = self._engine.compute_draft(pay_period_start, pay_period_end)
        return replace(draft, prepared_by=requested_by)

    def finalize(self, draft: PayrollRunDraft, approved_by: str) -> PayrollRun:
        approved_by = require_non_empty(approved_by, "approved_by")
        if not draft.prepared_by:
            raise ValidationError("Draft has no preparer")
        if approved_by == draft.prepared_by:
            logger.warning("self approval refused actor=%s period=%s..%s", approved_by, draft.pay_period_start, draft.pay_period_end)
            raise SelfApprovalForbidden("A payroll run cannot be approved by the user who prepared it")
        if not draft.paychecks:
            raise ValidationError("Draft has no paychecks")

        key = ("finalize", draft.pay_period_start, draft.pay_period_end, draft.prepared_by)
        with self._locks.hold(key):
            run = PayrollRun(
                run_id=0,
                pay_period_start=draft.pay_period_start,
                pay_period_end=draft.pay_period_end,
                status=PayrollStatus.APPROVED,
                prepared_by=draft.prepared_by,
                approved_by=approved_by,
                processed_at=self._clock(),
                total_gross_pay=draft.total_gross_pay,
                total_deductions=draft.total_deductions,
                total_net_pay=draft.total_net_pay,
                paychecks=tuple(p.with_status(PayrollStatus.APPROVED) for p in draft.paychecks),
                employee_count=len(draft.paychecks),
                version=1,
            )
            run_id = self._runs.insert_run(run)
            if run_id is None:
                raise ConcurrentModification(
                    f"Payroll for {draft.pay_period_start}..{draft.pay_period_end} prepared by "
                    f"{draft.prepared_by} is already finalized"
                )

        logger.info(
            "payroll run %s approved by=%s prepared by=%s net=%s",
            run_id,
            approved_by,
            draft.prepared_by,
            draft.total_net_pay,
        )
        return replace(run, run_id=run_id)

    def mark_paid(self, run_id: int, actor: str) -> PayrollRun:
        actor = require_non_empty(actor, "actor")
        with self._locks.hold(("run", int(run_id))):
            run = self.get_run(run_id)
            if run.status != PayrollStatus.APPROVED:
                raise InvalidStateTransition(f"Payroll run {run_id} is {run.status.value}; only APPROVED runs can be paid")
            ok = self._runs.update_status(
                run_id=run.run_id,
                expected_version=run.version,
                status=PayrollStatus.PAID,
                paid_by=actor,
                paid_at=self._clock(),
            )
            if not ok:
                raise ConcurrentModification(f"Payroll run {run_id} changed concurrently")
            paid = self.get_run(run_id)

        logger.info("payroll run %s marked paid by=%s", run_id, actor)
        return paid

    def delete_run(self, run_id: int, actor: str) -> None:
        actor = require_non_empty(actor, "actor")
        with self._locks.hold(("run", int(run_id))):
            run = self.get_run(run_id)
            if run.status == PayrollStatus.PAID:
                raise ImmutableRunError(f"Payroll run {run_id} is PAID and cannot be deleted")
            if not self._runs.delete_run(run_id=run.run_id, expected_version=run.version):
                raise ConcurrentModification(f"Payroll run {run_id} changed concurrently")

        logger.info("payroll run %s deleted by=%s", run_id, actor)

    def list_runs(self) -> Sequence[PayrollRun]:
        return sorted(self._runs.list_runs(), key=lambda r: (r.pay_period_end, r.run_id), reverse=True)

    def get_run(self, run_id: int) -> PayrollRun:
        run = self._runs.get_run(int(run_id))
        if not run:
            raise NotFound(f"Payroll run {run_id} not found")
        return run
