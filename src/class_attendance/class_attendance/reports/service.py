from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..attendance.model import AttendanceEvent
from ..attendance.repository import AttendanceRepository
from ..classes.repository import ClassRepository
from ..common.datetime_utils import to_iso_date
from ..core.enums import AttendanceStatus, SearchState
from ..personnel.ranking import rank_personnel
from ..personnel.repository import PersonnelRepository
from ..timeslots.repository import TimeSlotRepository
from .model import (
    ClassCountRow,
    ClassSearchResult,
    DashboardStats,
    DateWisePivot,
    HistoryRow,
    PersonHistory,
    SlotSummary,
    StatusCounts,
    StatusSummary,
)


def count_by_class(events: Sequence[AttendanceEvent]) -> dict[int, StatusCounts]:
    counts: dict[int, StatusCounts] = {}
    for e in events:
        counts.setdefault(e.daily_class_id, StatusCounts()).add(e.status)
    return counts


class ReportService:
    """Read-only report pipelines.

    Every call reads the store again; nothing is cached between calls.
    Missing join targets (a deleted slot or class) render as "" or zero.
    """

    def __init__(
        self,
        personnel: PersonnelRepository,
        slots: TimeSlotRepository,
        classes: ClassRepository,
        attendance: AttendanceRepository,
    ):
        self._personnel = personnel
        self._slots = slots
        self._classes = classes
        self._attendance = attendance

    def date_wise(self, class_date: date) -> DateWisePivot:
        slots = list(self._slots.list_active())
        personnel = rank_personnel(self._personnel.list_active())

        classes = self._classes.list_for_date(class_date)
        class_to_slot = {c.class_id: c.time_slot_id for c in classes}
        class_names = {c.time_slot_id: c.class_name for c in classes}

        events = self._attendance.list_for_classes(list(class_to_slot)) if class_to_slot else []

        # Only cells of the matrix count, so present + absent + unmarked == N x M.
        slot_ids = {s.slot_id for s in slots}
        personnel_ids = {p.personnel_id for p in personnel}
        cells: dict[int, dict[int, AttendanceStatus]] = {}
        for e in events:
            slot_id = class_to_slot.get(e.daily_class_id)
            if slot_id not in slot_ids or e.personnel_id not in personnel_ids:
                continue
            cells.setdefault(e.personnel_id, {})[slot_id] = e.status

        counts = StatusCounts()
        for row in cells.values():
            for status in row.values():
                counts.add(status)

        total = len(personnel) * len(slots)
        return DateWisePivot(
            class_date=class_date,
            slots=slots,
            personnel=personnel,
            class_names=class_names,
            cells=cells,
            summary=StatusSummary(
                present=counts.present,
                absent=counts.absent,
                unmarked=total - counts.total,
            ),
        )

    def person_wise(self, personnel_id: int) -> PersonHistory:
        person = self._personnel.get_by_id(int(personnel_id))
        history = self._attendance.history_for_personnel(int(personnel_id))

        rows = [
            HistoryRow(
                class_date=to_iso_date(h.class_date),
                class_name=h.class_name or "",
                slot_label=h.slot_label or "",
                status=h.status,
            )
            for h in history
        ]
        # ISO dates order lexicographically; the sort is stable for same-day rows.
        rows.sort(key=lambda r: r.class_date, reverse=True)

        counts = StatusCounts()
        for r in rows:
            counts.add(r.status)

        return PersonHistory(
            personnel_id=int(personnel_id),
            personnel=person,
            rows=rows,
            present=counts.present,
            absent=counts.absent,
        )

    def slot_wise(self, time_slot_id: int) -> SlotSummary:
        slot = self._slots.get_by_id(int(time_slot_id))
        classes = self._classes.list_for_slot(int(time_slot_id))
        if not classes:
            return SlotSummary(time_slot_id=int(time_slot_id), time_slot=slot, rows=[])

        counts = count_by_class(self._attendance.list_for_classes([c.class_id for c in classes]))
        label = slot.label if slot else ""
        rows = [
            ClassCountRow(
                class_id=c.class_id,
                class_date=to_iso_date(c.class_date),
                class_name=c.class_name,
                slot_label=label,
                present=counts.get(c.class_id, StatusCounts()).present,
                absent=counts.get(c.class_id, StatusCounts()).absent,
            )
            for c in classes
        ]
        return SlotSummary(time_slot_id=int(time_slot_id), time_slot=slot, rows=rows)

    def class_search(self, query: Optional[str]) -> ClassSearchResult:
        q = (query or "").strip()
        if not q:
            return ClassSearchResult(query="", state=SearchState.NOT_SEARCHED)

        listings = self._classes.search_by_name(q)
        if not listings:
            return ClassSearchResult(query=q, state=SearchState.EMPTY)

        counts = count_by_class(self._attendance.list_for_classes([c.class_id for c in listings]))
        rows = [
            ClassCountRow(
                class_id=c.class_id,
                class_date=to_iso_date(c.class_date),
                class_name=c.class_name,
                slot_label=c.slot_label or "",
                present=counts.get(c.class_id, StatusCounts()).present,
                absent=counts.get(c.class_id, StatusCounts()).absent,
            )
            for c in listings
        ]
        return ClassSearchResult(query=q, state=SearchState.FOUND, rows=rows)

    def dashboard(self, today: date) -> DashboardStats:
        total_personnel = len(self._personnel.list_active())
        active_slots = len(self._slots.list_active())
        classes = self._classes.list_for_date(today)

        percent: Optional[int] = None
        if classes:
            events = self._attendance.list_for_classes([c.class_id for c in classes])
            if events:
                counts = StatusCounts()
                for e in events:
                    counts.add(e.status)
                # Half-up rounding.
                percent = int(counts.present * 100 / counts.total + 0.5)

        return DashboardStats(
            today=today,
            total_personnel=total_personnel,
            active_slots=active_slots,
            classes_today=len(classes),
            attendance_percent=percent,
        )
