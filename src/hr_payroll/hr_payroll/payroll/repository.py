from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import PayrollStatus
from .model import PayrollRun


class PayrollRunRepository(Protocol):
    def insert_run(self, run: PayrollRun) -> Optional[int]:
        """Persist run, paychecks and lines in one transaction.

        Returns None without writing when an APPROVED or PAID run already exists
        for the same period and preparer.
        """
        raise NotImplementedError

    def get_run(self, run_id: int) -> Optional[PayrollRun]:
        raise NotImplementedError

    def list_runs(self) -> Sequence[PayrollRun]:
        """Summaries without paychecks, newest pay period first."""
        raise NotImplementedError

    def update_status(
        self,
        *,
        run_id: int,
        expected_version: int,
        status: PayrollStatus,
        paid_by: Optional[str] = None,
        paid_at: Optional[datetime] = None,
    ) -> bool:
        raise NotImplementedError

    def delete_run(self, *, run_id: int, expected_version: int) -> bool:
        raise NotImplementedError
