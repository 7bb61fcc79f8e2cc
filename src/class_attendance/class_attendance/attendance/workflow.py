"""Marking one class: pick a date and slot, tick who is present, save.

States::

    NO_SELECTION -> SLOT_CHOSEN -> CLASS_MISSING | CLASS_LOADED -> EDITING -> SAVING -> SAVED

A failed save lands back in EDITING with ``last_error`` set. The present-set
lives only in this object until ``save()`` writes one row per roster member.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..classes.model import ClassInstance
from ..classes.service import DailyClassService, clean_class_name
from ..common.datetime_utils import to_iso_date
from ..common.sequencing import RequestSequencer
from ..core.enums import AttendanceStatus, MarkingState
from ..core.exceptions import StoreError, ValidationError
from ..personnel.model import Personnel
from ..personnel.service import PersonnelService
from .model import AttendanceEvent
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

_CLASS_READY = (MarkingState.CLASS_LOADED, MarkingState.EDITING, MarkingState.SAVED)


@dataclass(frozen=True)
class SaveResult:
    class_id: int
    present: int
    absent: int

    def to_dict(self) -> dict:
        return {"class_id": self.class_id, "present": self.present, "absent": self.absent}


@dataclass(frozen=True)
class _Snapshot:
    state: MarkingState
    class_date: Optional[date]
    time_slot_id: Optional[int]
    daily_class: Optional[ClassInstance]
    present: frozenset


class MarkingWorkflow:
    def __init__(
        self,
        personnel: PersonnelService,
        classes: DailyClassService,
        attendance: AttendanceRepository,
    ):
        self._personnel = personnel
        self._classes = classes
        self._attendance = attendance
        self._sequencer = RequestSequencer()

        self.state = MarkingState.NO_SELECTION
        self.class_date: Optional[date] = None
        self.time_slot_id: Optional[int] = None
        self.daily_class: Optional[ClassInstance] = None
        self.roster: list[Personnel] = []
        self.last_error: Optional[str] = None
        self._present: set[int] = set()

    # ----- selection -----

    def load_roster(self) -> list[Personnel]:
        self.roster = self._personnel.list_active()
        return self.roster

    def select(self, class_date: Optional[date], time_slot_id: Optional[int]) -> MarkingState:
        if class_date is None or not time_slot_id:
            self._reset()
            return self.state

        token = self._sequencer.issue()
        before = self._snapshot()

        self.class_date = class_date
        self.time_slot_id = int(time_slot_id)
        self.daily_class = None
        self._present = set()
        self.last_error = None
        self.state = MarkingState.SLOT_CHOSEN

        try:
            found = self._classes.get_for(class_date=class_date, time_slot_id=int(time_slot_id))
            present = self._load_present(found.class_id) if found else set()
        except StoreError as e:
            if self._sequencer.is_current(token):
                self._restore(before)
                self.last_error = str(e)
            raise

        if not self._sequencer.is_current(token):
            logger.debug("Dropping stale load for %s slot=%s", class_date, time_slot_id)
            return self.state

        self.daily_class = found
        self._present = present
        self.state = MarkingState.CLASS_LOADED if found else MarkingState.CLASS_MISSING
        return self.state

    def create_class(self, class_name: Optional[str]) -> ClassInstance:
        if self.state != MarkingState.CLASS_MISSING:
            raise ValidationError("Select a date and time slot that has no class yet")
        name = clean_class_name(class_name)

        try:
            created = self._classes.create(class_date=self.class_date, time_slot_id=self.time_slot_id, class_name=name)
            present = self._load_present(created.class_id)
        except StoreError as e:
            self.last_error = str(e)
            raise

        self.daily_class = created
        self._present = present
        self.last_error = None
        self.state = MarkingState.CLASS_LOADED
        return created

    def rename_class(self, class_name: Optional[str]) -> ClassInstance:
        self._require_class()
        try:
            self.daily_class = self._classes.rename(self.daily_class.class_id, class_name=class_name)
        except StoreError as e:
            self.last_error = str(e)
            raise
        return self.daily_class

    # ----- editing -----

    @property
    def present_ids(self) -> frozenset:
        return frozenset(self._present)

    def toggle(self, personnel_id: int) -> bool:
        self._require_class()
        pid = int(personnel_id)
        if pid not in {p.personnel_id for p in self.roster}:
            raise ValidationError("Personnel is not on the active roster")

        if pid in self._present:
            self._present.discard(pid)
        else:
            self._present.add(pid)
        self.state = MarkingState.EDITING
        return pid in self._present

    def set_present(self, personnel_ids) -> None:
        """Replace the present-set (ids off the roster are ignored)."""
        self._require_class()
        roster_ids = {p.personnel_id for p in self.roster}
        self._present = {int(i) for i in personnel_ids} & roster_ids
        self.state = MarkingState.EDITING

    def mark_all_present(self) -> None:
        self._require_class()
        self._present = {p.personnel_id for p in self.roster}
        self.state = MarkingState.EDITING

    def mark_all_absent(self) -> None:
        self._require_class()
        self._present = set()
        self.state = MarkingState.EDITING

    # ----- commit -----

    def save(self) -> SaveResult:
        self._require_class()
        class_id = self.daily_class.class_id

        events = [
            AttendanceEvent(
                personnel_id=p.personnel_id,
                daily_class_id=class_id,
                status=AttendanceStatus.PRESENT if p.personnel_id in self._present else AttendanceStatus.ABSENT,
            )
            for p in self.roster
        ]

        self.state = MarkingState.SAVING
        try:
            self._attendance.upsert_many(events)
        except StoreError as e:
            self.state = MarkingState.EDITING
            self.last_error = str(e)
            logger.error("Saving attendance for class=%s failed: %s", class_id, e)
            raise

        present = sum(1 for e in events if e.status is AttendanceStatus.PRESENT)
        result = SaveResult(class_id=class_id, present=present, absent=len(events) - present)
        self.state = MarkingState.SAVED
        self.last_error = None
        logger.info("Attendance saved for class=%s: %s present, %s absent", class_id, result.present, result.absent)
        return result

    # ----- views -----

    def to_dict(self) -> dict:
        return {
            "state": self.state.value,
            "class_date": to_iso_date(self.class_date),
            "time_slot_id": self.time_slot_id,
            "daily_class": self.daily_class.to_dict() if self.daily_class else None,
            "roster": [dict(p.to_dict(), present=p.personnel_id in self._present) for p in self.roster],
            "present": sum(1 for p in self.roster if p.personnel_id in self._present),
            "total": len(self.roster),
            "last_error": self.last_error,
        }

    # ----- internals -----

    def _load_present(self, class_id: int) -> set[int]:
        return {
            e.personnel_id
            for e in self._attendance.list_for_class(class_id)
            if e.status is AttendanceStatus.PRESENT
        }

    def _require_class(self) -> None:
        if self.daily_class is None or self.state not in _CLASS_READY:
            raise ValidationError("No class is loaded for the selected date and time slot")

    def _reset(self) -> None:
        self._sequencer.issue()
        self.state = MarkingState.NO_SELECTION
        self.class_date = None
        self.time_slot_id = None
        self.daily_class = None
        self._present = set()
        self.last_error = None

    def _snapshot(self) -> _Snapshot:
        return _Snapshot(
            state=self.state,
            class_date=self.class_date,
            time_slot_id=self.time_slot_id,
            daily_class=self.daily_class,
            present=frozenset(self._present),
        )

    def _restore(self, snap: _Snapshot) -> None:
        self.state = snap.state
        self.class_date = snap.class_date
        self.time_slot_id = snap.time_slot_id
        self.daily_class = snap.daily_class
        self._present = set(snap.present)
