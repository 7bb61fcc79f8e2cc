from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Category, SubCategory
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Personnel, parse_category, parse_sub_category
from .repository import PersonnelRepository

_COLUMNS = "personnel_id, employee_id, name, category, sub_category, is_active"


def _row_to_personnel(r: dict) -> Personnel:
    return Personnel(
        personnel_id=int(r["personnel_id"]),
        employee_id=r["employee_id"],
        name=r["name"],
        category=parse_category(r["category"]),
        sub_category=parse_sub_category(r.get("sub_category")),
        is_active=bool(r["is_active"]),
    )


class MySQLPersonnelRepository(PersonnelRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Personnel]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM personnel")
            return [_row_to_personnel(r) for r in fetchall(cur)]

    def list_active(self) -> Sequence[Personnel]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM personnel WHERE is_active=1")
            return [_row_to_personnel(r) for r in fetchall(cur)]

    def get_by_id(self, personnel_id: int) -> Optional[Personnel]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM personnel WHERE personnel_id=%s", (int(personnel_id),))
            r = fetchone(cur)
            return _row_to_personnel(r) if r else None

    def get_by_employee_id(self, employee_id: str) -> Optional[Personnel]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM personnel WHERE employee_id=%s", (employee_id,))
            r = fetchone(cur)
            return _row_to_personnel(r) if r else None

    def create(
        self,
        *,
        employee_id: str,
        name: str,
        category: Category,
        sub_category: Optional[SubCategory],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO personnel(employee_id, name, category, sub_category)
                VALUES(%s,%s,%s,%s)
                """,
                (employee_id, name, category.value, sub_category.value if sub_category else None),
            )
            return int(cur.lastrowid)

    def update(
        self,
        personnel_id: int,
        *,
        employee_id: str,
        name: str,
        category: Category,
        sub_category: Optional[SubCategory],
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE personnel
                SET employee_id=%s, name=%s, category=%s, sub_category=%s
                WHERE personnel_id=%s
                """,
                (
                    employee_id,
                    name,
                    category.value,
                    sub_category.value if sub_category else None,
                    int(personnel_id),
                ),
            )
            return cur.rowcount > 0

    def set_active(self, personnel_id: int, *, is_active: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE personnel SET is_active=%s WHERE personnel_id=%s",
                (1 if is_active else 0, int(personnel_id)),
            )
            return cur.rowcount > 0

    def delete(self, personnel_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM personnel WHERE personnel_id=%s", (int(personnel_id),))
            return cur.rowcount > 0
