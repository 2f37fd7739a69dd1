from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..common.money import to_decimal
from ..core.enums import ComponentKind, PayrollStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Paycheck, PaycheckLine, PayrollRun
from .repository import PayrollRunRepository

_RUN_COLUMNS = (
    "r.run_id, r.pay_period_start, r.pay_period_end, r.status, r.prepared_by, r.approved_by, "
    "r.processed_at, r.paid_by, r.paid_at, r.total_gross_pay, r.total_deductions, r.total_net_pay, r.version"
)

_PAYCHECK_COLUMNS = (
    "employee_id, employee_username, base_pay, gross_pay, commission_amount, tax_deduction, "
    "provident_fund_deduction, late_penalty_deduction, absent_penalty_deduction, other_deductions, "
    "total_deductions, net_pay, status"
)

_FINAL_STATUSES = (PayrollStatus.APPROVED.value, PayrollStatus.PAID.value)


def _row_to_run(r: dict, *, paychecks: tuple[Paycheck, ...] = (), employee_count: Optional[int] = None) -> PayrollRun:
    return PayrollRun(
        run_id=int(r["run_id"]),
        pay_period_start=r["pay_period_start"],
        pay_period_end=r["pay_period_end"],
        status=PayrollStatus(r["status"]),
        prepared_by=r["prepared_by"],
        approved_by=r.get("approved_by"),
        processed_at=r["processed_at"],
        paid_by=r.get("paid_by"),
        paid_at=r.get("paid_at"),
        total_gross_pay=to_decimal(r["total_gross_pay"]),
        total_deductions=to_decimal(r["total_deductions"]),
        total_net_pay=to_decimal(r["total_net_pay"]),
        paychecks=paychecks,
        employee_count=int(employee_count if employee_count is not None else len(paychecks)),
        version=int(r["version"]),
    )


def _row_to_paycheck(r: dict, lines: tuple[PaycheckLine, ...]) -> Paycheck:
    return Paycheck(
        employee_id=int(r["employee_id"]),
        employee_username=r["employee_username"],
        base_pay=to_decimal(r["base_pay"]),
        gross_pay=to_decimal(r["gross_pay"]),
        commission_amount=to_decimal(r["commission_amount"]),
        tax_deduction=to_decimal(r["tax_deduction"]),
        provident_fund_deduction=to_decimal(r["provident_fund_deduction"]),
        other_deductions=to_decimal(r["other_deductions"]),
        total_deductions=to_decimal(r["total_deductions"]),
        net_pay=to_decimal(r["net_pay"]),
        status=PayrollStatus(r["status"]),
        late_penalty_deduction=to_decimal(r["late_penalty_deduction"]),
        absent_penalty_deduction=to_decimal(r["absent_penalty_deduction"]),
        lines=lines,
    )


class MySQLPayrollRunRepository(PayrollRunRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def insert_run(self, run: PayrollRun) -> Optional[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            # Locks the (period, preparer) index range until commit.
            cur.execute(
                f"""
                SELECT run_id FROM payroll_runs
                WHERE pay_period_start=%s AND pay_period_end=%s AND prepared_by=%s AND status IN (%s,%s)
                FOR UPDATE
                """,
                (run.pay_period_start, run.pay_period_end, run.prepared_by, *_FINAL_STATUSES),
            )
            if fetchall(cur):
                return None

            cur.execute(
                """
                INSERT INTO payroll_runs(
                    pay_period_start, pay_period_end, status, prepared_by, approved_by, processed_at,
                    total_gross_pay, total_deductions, total_net_pay, version
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    run.pay_period_start,
                    run.pay_period_end,
                    run.status.value,
                    run.prepared_by,
                    run.approved_by,
                    run.processed_at,
                    run.total_gross_pay,
                    run.total_deductions,
                    run.total_net_pay,
                    int(run.version),
                ),
            )
            run_id = int(cur.lastrowid)

            if run.paychecks:
                cur.executemany(
                    f"""
                    INSERT INTO paychecks(run_id, {_PAYCHECK_COLUMNS})
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    [
                        (
                            run_id,
                            p.employee_id,
                            p.employee_username,
                            p.base_pay,
                            p.gross_pay,
                            p.commission_amount,
                            p.tax_deduction,
                            p.provident_fund_deduction,
                            p.late_penalty_deduction,
                            p.absent_penalty_deduction,
                            p.other_deductions,
                            p.total_deductions,
                            p.net_pay,
                            p.status.value,
                        )
                        for p in run.paychecks
                    ],
                )

            line_rows = [
                (run_id, p.employee_id, position, line.name, line.kind.value, line.amount)
                for p in run.paychecks
                for position, line in enumerate(p.lines)
            ]
            if line_rows:
                cur.executemany(
                    """
                    INSERT INTO paycheck_lines(run_id, employee_id, position, name, kind, amount)
                    VALUES(%s,%s,%s,%s,%s,%s)
                    """,
                    line_rows,
                )
            return run_id

    def get_run(self, run_id: int) -> Optional[PayrollRun]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_RUN_COLUMNS} FROM payroll_runs r WHERE r.run_id=%s", (int(run_id),))
            r = fetchone(cur)
            if not r:
                return None

            cur.execute(
                """
                SELECT employee_id, name, kind, amount FROM paycheck_lines
                WHERE run_id=%s
                ORDER BY employee_id, position
                """,
                (int(run_id),),
            )
            lines_by_employee: dict[int, list[PaycheckLine]] = {}
            for row in fetchall(cur):
                lines_by_employee.setdefault(int(row["employee_id"]), []).append(
                    PaycheckLine(row["name"], ComponentKind(row["kind"]), to_decimal(row["amount"]))
                )

            cur.execute(
                f"SELECT {_PAYCHECK_COLUMNS} FROM paychecks WHERE run_id=%s ORDER BY employee_id",
                (int(run_id),),
            )
            paychecks = tuple(
                _row_to_paycheck(p, tuple(lines_by_employee.get(int(p["employee_id"]), ())))
                for p in fetchall(cur)
            )
            return _row_to_run(r, paychecks=paychecks)

    def list_runs(self) -> Sequence[PayrollRun]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_RUN_COLUMNS}, COUNT(p.paycheck_id) AS employee_count
                FROM payroll_runs r
                LEFT JOIN paychecks p ON p.run_id = r.run_id
                GROUP BY r.run_id
                ORDER BY r.pay_period_end DESC, r.run_id DESC
                """
            )
            return [_row_to_run(r, employee_count=r["employee_count"]) for r in fetchall(cur)]

    def update_status(
        self,
        *,
        run_id: int,
        expected_version: int,
        status: PayrollStatus,
        paid_by: Optional[str] = None,
        paid_at: Optional[datetime] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE payroll_runs
                SET status=%s, paid_by=COALESCE(%s, paid_by), paid_at=COALESCE(%s, paid_at), version=version+1
                WHERE run_id=%s AND version=%s
                """,
                (status.value, paid_by, paid_at, int(run_id), int(expected_version)),
            )
            if cur.rowcount != 1:
                return False
            cur.execute("UPDATE paychecks SET status=%s WHERE run_id=%s", (status.value, int(run_id)))
            return True

    def delete_run(self, *, run_id: int, expected_version: int) -> bool:
        # paychecks and paycheck_lines go with the run (ON DELETE CASCADE)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM payroll_runs WHERE run_id=%s AND version=%s AND status<>%s",
                (int(run_id), int(expected_version), PayrollStatus.PAID.value),
            )
            return cur.rowcount == 1
