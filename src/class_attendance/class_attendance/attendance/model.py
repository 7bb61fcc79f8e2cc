from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceEvent:
    """Domain entity: the mark of one person for one class.

    (personnel_id, daily_class_id) is a natural key; no row means unmarked.
    """

    personnel_id: int
    daily_class_id: int
    status: AttendanceStatus

    @property
    def key(self) -> tuple[int, int]:
        return (self.personnel_id, self.daily_class_id)


@dataclass(frozen=True)
class AttendanceHistoryRow:
    """Read-model: an event joined with its class and the class's slot.

    Joined fields are None when the class or slot no longer exists.
    """

    personnel_id: int
    daily_class_id: int
    status: AttendanceStatus
    class_date: Optional[date] = None
    class_name: Optional[str] = None
    slot_label: Optional[str] = None
