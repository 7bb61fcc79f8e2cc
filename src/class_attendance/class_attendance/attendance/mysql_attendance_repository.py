from __future__ import annotations

from typing import Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import chunked, db_cursor, fetchall, in_clause
from .model import AttendanceEvent, AttendanceHistoryRow
from .repository import AttendanceRepository

IN_CHUNK_SIZE = 500


def _row_to_event(r: dict) -> AttendanceEvent:
    return AttendanceEvent(
        personnel_id=int(r["personnel_id"]),
        daily_class_id=int(r["daily_class_id"]),
        status=AttendanceStatus(r["status"]),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_class(self, class_id: int) -> Sequence[AttendanceEvent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT personnel_id, daily_class_id, status FROM attendance WHERE daily_class_id=%s",
                (int(class_id),),
            )
            return [_row_to_event(r) for r in fetchall(cur)]

    def list_for_classes(self, class_ids: Sequence[int]) -> Sequence[AttendanceEvent]:
        ids = [int(i) for i in class_ids]
        if not ids:
            return []

        out: list[AttendanceEvent] = []
        with db_cursor(self._conn_factory) as (_, cur):
            for part in chunked(ids, IN_CHUNK_SIZE):
                cur.execute(
                    f"""
                    SELECT personnel_id, daily_class_id, status
                    FROM attendance
                    WHERE daily_class_id IN ({in_clause(part)})
                    """,
                    tuple(part),
                )
                out.extend(_row_to_event(r) for r in fetchall(cur))
        return out

    def upsert_many(self, events: Sequence[AttendanceEvent]) -> int:
        if not events:
            return 0

        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(
                """
                INSERT INTO attendance(personnel_id, daily_class_id, status)
                VALUES(%s,%s,%s)
                ON DUPLICATE KEY UPDATE status=VALUES(status)
                """,
                [(e.personnel_id, e.daily_class_id, e.status.value) for e in events],
            )
        return len(events)

    def history_for_personnel(self, personnel_id: int) -> Sequence[AttendanceHistoryRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT
                    a.personnel_id, a.daily_class_id, a.status,
                    dc.class_date, dc.class_name,
                    ts.label AS slot_label
                FROM attendance a
                LEFT JOIN daily_classes dc ON dc.class_id = a.daily_class_id
                LEFT JOIN time_slots ts ON ts.slot_id = dc.time_slot_id
                WHERE a.personnel_id=%s
                ORDER BY a.created_at DESC, a.attendance_id DESC
                """,
                (int(personnel_id),),
            )
            return [
                AttendanceHistoryRow(
                    personnel_id=int(r["personnel_id"]),
                    daily_class_id=int(r["daily_class_id"]),
                    status=AttendanceStatus(r["status"]),
                    class_date=r.get("class_date"),
                    class_name=r.get("class_name"),
                    slot_label=r.get("slot_label"),
                )
                for r in fetchall(cur)
            ]
