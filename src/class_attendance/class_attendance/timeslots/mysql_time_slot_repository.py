from __future__ import annotations

from datetime import time
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import TimeSlot
from .repository import TimeSlotRepository

_COLUMNS = "slot_id, slot_time, label, sort_order, is_active"


def _row_to_slot(r: dict) -> TimeSlot:
    return TimeSlot(
        slot_id=int(r["slot_id"]),
        time=normalize_mysql_time(r["slot_time"]),
        label=r["label"],
        sort_order=int(r["sort_order"]),
        is_active=bool(r["is_active"]),
    )


class MySQLTimeSlotRepository(TimeSlotRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[TimeSlot]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM time_slots ORDER BY sort_order, slot_id")
            return [_row_to_slot(r) for r in fetchall(cur)]

    def list_active(self) -> Sequence[TimeSlot]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM time_slots WHERE is_active=1 ORDER BY sort_order, slot_id")
            return [_row_to_slot(r) for r in fetchall(cur)]

    def get_by_id(self, slot_id: int) -> Optional[TimeSlot]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM time_slots WHERE slot_id=%s", (int(slot_id),))
            r = fetchone(cur)
            return _row_to_slot(r) if r else None

    def max_sort_order(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COALESCE(MAX(sort_order), 0) AS max_order FROM time_slots")
            r = fetchone(cur)
            return int(r["max_order"]) if r else 0

    def create(self, *, slot_time: time, label: str, sort_order: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO time_slots(slot_time, label, sort_order) VALUES(%s,%s,%s)",
                (slot_time, label, int(sort_order)),
            )
            return int(cur.lastrowid)

    def set_active(self, slot_id: int, *, is_active: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE time_slots SET is_active=%s WHERE slot_id=%s",
                (1 if is_active else 0, int(slot_id)),
            )
            return cur.rowcount > 0

    def delete(self, slot_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM time_slots WHERE slot_id=%s", (int(slot_id),))
            return cur.rowcount > 0
