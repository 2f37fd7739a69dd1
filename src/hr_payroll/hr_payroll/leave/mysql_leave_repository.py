from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import LeaveStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import LeaveRequest
from .repository import LeaveRepository

_COLUMNS = (
    "request_id, employee_id, leave_type, start_date, end_date, reason, status, "
    "request_date, decided_by, decided_at"
)


def _row_to_leave(r: dict) -> LeaveRequest:
    return LeaveRequest(
        request_id=int(r["request_id"]),
        employee_id=int(r["employee_id"]),
        leave_type=r["leave_type"],
        start_date=r["start_date"],
        end_date=r["end_date"],
        reason=r["reason"],
        status=LeaveStatus(r["status"]),
        request_date=r["request_date"],
        decided_by=r.get("decided_by"),
        decided_at=r.get("decided_at"),
    )


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        employee_id: int,
        leave_type: str,
        start_date: date,
        end_date: date,
        reason: str,
        request_date: datetime,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_requests(employee_id, leave_type, start_date, end_date, reason, status, request_date)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (int(employee_id), leave_type, start_date, end_date, reason, LeaveStatus.PENDING.value, request_date),
            )
            return int(cur.lastrowid)

    def get_by_id(self, request_id: int) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM leave_requests WHERE request_id=%s", (int(request_id),))
            r = fetchone(cur)
            return _row_to_leave(r) if r else None

    def list_requests(
        self,
        *,
        status: Optional[LeaveStatus] = None,
        employee_id: Optional[int] = None,
        limit: int = 200,
    ) -> Sequence[LeaveRequest]:
        clauses = ["1=1"]
        params: list[object] = []
        if status is not None:
            clauses.append("status=%s")
            params.append(status.value)
        if employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(int(employee_id))
        params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM leave_requests
                WHERE {" AND ".join(clauses)}
                ORDER BY request_date DESC, request_id DESC
                LIMIT %s
                """,
                tuple(params),
            )
            return [_row_to_leave(r) for r in fetchall(cur)]

    def list_approved_overlapping(
        self,
        *,
        start_date: date,
        end_date: date,
        employee_id: Optional[int] = None,
    ) -> Sequence[LeaveRequest]:
        clauses = ["status=%s", "start_date<=%s", "end_date>=%s"]
        params: list[object] = [LeaveStatus.APPROVED.value, end_date, start_date]
        if employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(int(employee_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM leave_requests
                WHERE {" AND ".join(clauses)}
                ORDER BY employee_id ASC, start_date ASC
                """,
                tuple(params),
            )
            return [_row_to_leave(r) for r in fetchall(cur)]

    def decide(
        self,
        *,
        request_id: int,
        status: LeaveStatus,
        decided_by: str,
        decided_at: datetime,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_requests
                SET status=%s, decided_by=%s, decided_at=%s
                WHERE request_id=%s AND status=%s
                """,
                (status.value, decided_by, decided_at, int(request_id), LeaveStatus.PENDING.value),
            )
            return cur.rowcount > 0
