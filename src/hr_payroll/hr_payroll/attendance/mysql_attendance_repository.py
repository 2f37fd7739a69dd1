from __future__ import annotations

from datetime import date, time
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = "attendance_id, employee_id, work_date, clock_in_time, clock_out_time, status, remarks"


def _row_to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        employee_id=int(r["employee_id"]),
        work_date=r["work_date"],
        clock_in_time=normalize_mysql_time(r.get("clock_in_time")),
        clock_out_time=normalize_mysql_time(r.get("clock_out_time")),
        status=AttendanceStatus(r["status"]),
        remarks=r.get("remarks"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE employee_id=%s AND work_date=%s",
                (int(employee_id), work_date),
            )
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_records WHERE attendance_id=%s", (int(attendance_id),))
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def list_for_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE work_date=%s ORDER BY employee_id ASC",
                (work_date,),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def list_for_range(
        self,
        *,
        start_date: date,
        end_date: date,
        employee_id: Optional[int] = None,
    ) -> Sequence[AttendanceRecord]:
        clauses = ["work_date BETWEEN %s AND %s"]
        params: list[object] = [start_date, end_date]
        if employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(int(employee_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE {" AND ".join(clauses)}
                ORDER BY employee_id ASC, work_date ASC
                """,
                tuple(params),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def create(
        self,
        *,
        employee_id: int,
        work_date: date,
        clock_in_time: Optional[time],
        status: AttendanceStatus,
        remarks: Optional[str] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(employee_id, work_date, clock_in_time, status, remarks)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (int(employee_id), work_date, clock_in_time, status.value, remarks),
            )
            return int(cur.lastrowid)

    def update_clock_out(self, *, attendance_id: int, clock_out_time: time) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE attendance_records SET clock_out_time=%s WHERE attendance_id=%s",
                (clock_out_time, int(attendance_id)),
            )
            return cur.rowcount > 0

    def update_remarks(self, *, attendance_id: int, remarks: Optional[str]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE attendance_records SET remarks=%s WHERE attendance_id=%s",
                (remarks, int(attendance_id)),
            )
            return cur.rowcount > 0
