from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.exceptions import StoreError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, escape_like, fetchall, fetchone
from .model import ClassInstance, ClassListing
from .repository import ClassRepository

_COLUMNS = "class_id, class_date, time_slot_id, class_name"


def _row_to_class(r: dict) -> ClassInstance:
    return ClassInstance(
        class_id=int(r["class_id"]),
        class_date=r["class_date"],
        time_slot_id=int(r["time_slot_id"]),
        class_name=r["class_name"],
    )


class MySQLClassRepository(ClassRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, class_id: int) -> Optional[ClassInstance]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM daily_classes WHERE class_id=%s", (int(class_id),))
            r = fetchone(cur)
            return _row_to_class(r) if r else None

    def find_for_date_and_slot(self, *, class_date: date, time_slot_id: int) -> Optional[ClassInstance]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM daily_classes WHERE class_date=%s AND time_slot_id=%s",
                (class_date, int(time_slot_id)),
            )
            r = fetchone(cur)
            return _row_to_class(r) if r else None

    def list_for_date(self, class_date: date) -> Sequence[ClassInstance]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM daily_classes WHERE class_date=%s", (class_date,))
            return [_row_to_class(r) for r in fetchall(cur)]

    def list_for_slot(self, time_slot_id: int) -> Sequence[ClassInstance]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM daily_classes
                WHERE time_slot_id=%s
                ORDER BY class_date DESC
                """,
                (int(time_slot_id),),
            )
            return [_row_to_class(r) for r in fetchall(cur)]

    def search_by_name(self, query: str) -> Sequence[ClassListing]:
        pattern = f"%{escape_like(query.lower())}%"
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT dc.class_id, dc.class_date, dc.time_slot_id, dc.class_name, ts.label AS slot_label
                FROM daily_classes dc
                LEFT JOIN time_slots ts ON ts.slot_id = dc.time_slot_id
                WHERE LOWER(dc.class_name) LIKE %s
                ORDER BY dc.class_date DESC
                """,
                (pattern,),
            )
            return [
                ClassListing(
                    class_id=int(r["class_id"]),
                    class_date=r.get("class_date"),
                    time_slot_id=r.get("time_slot_id"),
                    class_name=r.get("class_name") or "",
                    slot_label=r.get("slot_label"),
                )
                for r in fetchall(cur)
            ]

    def create(self, *, class_date: date, time_slot_id: int, class_name: str) -> ClassInstance:
        with db_cursor(self._conn_factory) as (_, cur):
            # The UNIQUE(class_date, time_slot_id) key turns a second insert into a no-op.
            cur.execute(
                """
                INSERT INTO daily_classes(class_date, time_slot_id, class_name)
                VALUES(%s,%s,%s)
                ON DUPLICATE KEY UPDATE class_id=class_id
                """,
                (class_date, int(time_slot_id), class_name),
            )
            cur.execute(
                f"SELECT {_COLUMNS} FROM daily_classes WHERE class_date=%s AND time_slot_id=%s",
                (class_date, int(time_slot_id)),
            )
            r = fetchone(cur)
            if not r:
                raise StoreError("Class was not stored")
            return _row_to_class(r)

    def rename(self, class_id: int, *, class_name: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE daily_classes SET class_name=%s WHERE class_id=%s",
                (class_name, int(class_id)),
            )
            return cur.rowcount > 0
