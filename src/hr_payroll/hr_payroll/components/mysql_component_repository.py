from __future__ import annotations

from typing import Optional, Sequence

from ..common.money import to_decimal
from ..core.enums import ComponentKind
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import SalaryComponent
from .repository import SalaryComponentRepository

_COLUMNS = "component_id, name, kind, amount, is_percentage, last_updated"


def _row_to_component(r: dict) -> SalaryComponent:
    return SalaryComponent(
        component_id=int(r["component_id"]),
        name=r["name"],
        kind=ComponentKind(r["kind"]),
        amount=to_decimal(r["amount"]),
        is_percentage=bool(r["is_percentage"]),
        last_updated=r.get("last_updated"),
    )


class MySQLSalaryComponentRepository(SalaryComponentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self, *, kind: Optional[ComponentKind] = None) -> Sequence[SalaryComponent]:
        with db_cursor(self._conn_factory) as (_, cur):
            if kind is None:
                cur.execute(f"SELECT {_COLUMNS} FROM salary_components ORDER BY component_id ASC")
            else:
                cur.execute(
                    f"SELECT {_COLUMNS} FROM salary_components WHERE kind=%s ORDER BY component_id ASC",
                    (kind.value,),
                )
            return [_row_to_component(r) for r in fetchall(cur)]

    def get_by_id(self, component_id: int) -> Optional[SalaryComponent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM salary_components WHERE component_id=%s", (int(component_id),))
            r = fetchone(cur)
            return _row_to_component(r) if r else None

    def insert(self, component: SalaryComponent) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO salary_components(name, kind, amount, is_percentage, last_updated)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (
                    component.name,
                    component.kind.value,
                    component.amount,
                    int(component.is_percentage),
                    component.last_updated,
                ),
            )
            return int(cur.lastrowid)

    def update(self, component: SalaryComponent) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE salary_components
                SET name=%s, kind=%s, amount=%s, is_percentage=%s, last_updated=%s
                WHERE component_id=%s
                """,
                (
                    component.name,
                    component.kind.value,
                    component.amount,
                    int(component.is_percentage),
                    component.last_updated,
                    int(component.component_id),
                ),
            )
            return cur.rowcount > 0

    def delete(self, component_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM salary_components WHERE component_id=%s", (int(component_id),))
            return cur.rowcount > 0
