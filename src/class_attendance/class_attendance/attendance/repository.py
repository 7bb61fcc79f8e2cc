from __future__ import annotations

from typing import Protocol, Sequence

from .model import AttendanceEvent, AttendanceHistoryRow


class AttendanceRepository(Protocol):
    def list_for_class(self, class_id: int) -> Sequence[AttendanceEvent]:
        raise NotImplementedError

    def list_for_classes(self, class_ids: Sequence[int]) -> Sequence[AttendanceEvent]:
        raise NotImplementedError

    def upsert_many(self, events: Sequence[AttendanceEvent]) -> int:
        """Insert or overwrite events keyed on (personnel_id, daily_class_id).

        Applied as one batch. Returns the number of events written.
        """

        raise NotImplementedError

    def history_for_personnel(self, personnel_id: int) -> Sequence[AttendanceHistoryRow]:
        """Every event of one person, most recently recorded first."""

        raise NotImplementedError
