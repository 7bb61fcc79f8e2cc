from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..common.datetime_utils import to_iso_date
from ..core.enums import AttendanceStatus, SearchState
from ..personnel.model import Personnel
from ..timeslots.model import TimeSlot


@dataclass
class StatusCounts:
    present: int = 0
    absent: int = 0

    def add(self, status: AttendanceStatus) -> None:
        if status is AttendanceStatus.PRESENT:
            self.present += 1
        elif status is AttendanceStatus.ABSENT:
            self.absent += 1
        else:
            raise ValueError(f"Unhandled attendance status: {status!r}")

    @property
    def total(self) -> int:
        return self.present + self.absent


@dataclass(frozen=True)
class StatusSummary:
    present: int
    absent: int
    unmarked: int

    def to_dict(self) -> dict:
        return {"present": self.present, "absent": self.absent, "unmarked": self.unmarked}


@dataclass(frozen=True)
class DateWisePivot:
    """Personnel x active slot matrix for one date."""

    class_date: date
    slots: list[TimeSlot]
    personnel: list[Personnel]
    class_names: dict[int, str]
    cells: dict[int, dict[int, AttendanceStatus]]
    summary: StatusSummary

    def cell(self, personnel_id: int, slot_id: int) -> Optional[AttendanceStatus]:
        return self.cells.get(personnel_id, {}).get(slot_id)

    def matrix(self) -> list[dict]:
        out = []
        for p in self.personnel:
            statuses = [self.cell(p.personnel_id, s.slot_id) for s in self.slots]
            out.append(
                {
                    "personnel": p.to_dict(),
                    "cells": [st.value if st else "" for st in statuses],
                }
            )
        return out

    def to_dict(self) -> dict:
        return {
            "class_date": to_iso_date(self.class_date),
            "slots": [
                dict(s.to_dict(), class_name=self.class_names.get(s.slot_id, "")) for s in self.slots
            ],
            "rows": self.matrix(),
            "summary": self.summary.to_dict(),
        }


@dataclass(frozen=True)
class HistoryRow:
    class_date: str
    class_name: str
    slot_label: str
    status: AttendanceStatus

    def to_dict(self) -> dict:
        return {
            "class_date": self.class_date,
            "class_name": self.class_name,
            "slot_label": self.slot_label,
            "status": self.status.value,
        }


@dataclass(frozen=True)
class PersonHistory:
    personnel_id: int
    personnel: Optional[Personnel]
    rows: list[HistoryRow]
    present: int
    absent: int

    @property
    def total(self) -> int:
        return len(self.rows)

    def to_dict(self) -> dict:
        return {
            "personnel": self.personnel.to_dict() if self.personnel else None,
            "rows": [r.to_dict() for r in self.rows],
            "present": self.present,
            "absent": self.absent,
            "total": self.total,
        }


@dataclass(frozen=True)
class ClassCountRow:
    class_id: int
    class_date: str
    class_name: str
    slot_label: str
    present: int
    absent: int

    def to_dict(self) -> dict:
        return {
            "class_id": self.class_id,
            "class_date": self.class_date,
            "class_name": self.class_name,
            "slot_label": self.slot_label,
            "present": self.present,
            "absent": self.absent,
        }


@dataclass(frozen=True)
class SlotSummary:
    time_slot_id: int
    time_slot: Optional[TimeSlot]
    rows: list[ClassCountRow]

    def to_dict(self) -> dict:
        return {
            "time_slot": self.time_slot.to_dict() if self.time_slot else None,
            "rows": [r.to_dict() for r in self.rows],
        }


@dataclass(frozen=True)
class ClassSearchResult:
    query: str
    state: SearchState
    rows: list[ClassCountRow] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "query": self.query,
            "state": self.state.value,
            "rows": [r.to_dict() for r in self.rows],
        }


@dataclass(frozen=True)
class DashboardStats:
    today: date
    total_personnel: int
    active_slots: int
    classes_today: int
    attendance_percent: Optional[int]

    def to_dict(self) -> dict:
        return {
            "today": to_iso_date(self.today),
            "total_personnel": self.total_personnel,
            "active_slots": self.active_slots,
            "classes_today": self.classes_today,
            "attendance_percent": "N/A" if self.attendance_percent is None else f"{self.attendance_percent}%",
        }
