from __future__ import annotations

import logging
from datetime import date
from typing import Mapping, Optional

from ..common.validators import require_name
from ..core.constants import CLASS_NAME_MAX_LENGTH
from ..core.enums import SlotSaveAction
from ..core.exceptions import NotFoundError, StoreError, ValidationError
from ..timeslots.repository import TimeSlotRepository
from .model import BatchSaveResult, ClassInstance, SlotSaveOutcome
from .repository import ClassRepository

logger = logging.getLogger(__name__)


def clean_class_name(value: Optional[str]) -> str:
    return require_name(value, "Class name", CLASS_NAME_MAX_LENGTH)


class DailyClassService:
    """Use case: create, rename and schedule the classes of a day."""

    def __init__(self, classes: ClassRepository, slots: TimeSlotRepository):
        self._classes = classes
        self._slots = slots

    def get_for(self, *, class_date: date, time_slot_id: int) -> Optional[ClassInstance]:
        return self._classes.find_for_date_and_slot(class_date=class_date, time_slot_id=int(time_slot_id))

    def list_for_date(self, class_date: date) -> list[ClassInstance]:
        return list(self._classes.list_for_date(class_date))

    def create(self, *, class_date: date, time_slot_id: int, class_name: Optional[str]) -> ClassInstance:
        """Create the class for (date, slot), or return the one already there."""

        name = clean_class_name(class_name)
        if not self._slots.get_by_id(int(time_slot_id)):
            raise NotFoundError("Time slot not found")

        created = self._classes.create(class_date=class_date, time_slot_id=int(time_slot_id), class_name=name)
        logger.info("Class %r on %s slot=%s (id=%s)", created.class_name, class_date, time_slot_id, created.class_id)
        return created

    def rename(self, class_id: int, *, class_name: Optional[str]) -> ClassInstance:
        name = clean_class_name(class_name)
        current = self._classes.get_by_id(int(class_id))
        if not current:
            raise NotFoundError("Class not found")
        if current.class_name != name:
            self._classes.rename(current.class_id, class_name=name)
        return ClassInstance(
            class_id=current.class_id,
            class_date=current.class_date,
            time_slot_id=current.time_slot_id,
            class_name=name,
        )

    def save_day_schedule(self, *, class_date: date, names: Mapping[int, Optional[str]]) -> BatchSaveResult:
        """Assign class names to every active slot of one day.

        Each slot is written independently. Failures are collected per slot and
        slots already written are kept; callers decide whether to
        ``raise_for_failures()``.
        """

        slots = self._slots.list_active()
        existing = {c.time_slot_id: c for c in self._classes.list_for_date(class_date)}
        result = BatchSaveResult(class_date=class_date)

        for slot in slots:
            raw = names.get(slot.slot_id)
            if not raw or not raw.strip():
                result.outcomes.append(SlotSaveOutcome(time_slot_id=slot.slot_id, action=SlotSaveAction.SKIPPED))
                continue

            try:
                name = clean_class_name(raw)
                current = existing.get(slot.slot_id)
                if current is None:
                    created = self._classes.create(class_date=class_date, time_slot_id=slot.slot_id, class_name=name)
                    outcome = SlotSaveOutcome(slot.slot_id, SlotSaveAction.CREATED, class_id=created.class_id)
                elif current.class_name != name:
                    self._classes.rename(current.class_id, class_name=name)
                    outcome = SlotSaveOutcome(slot.slot_id, SlotSaveAction.RENAMED, class_id=current.class_id)
                else:
                    outcome = SlotSaveOutcome(slot.slot_id, SlotSaveAction.UNCHANGED, class_id=current.class_id)
            except (ValidationError, StoreError) as e:
                outcome = SlotSaveOutcome(slot.slot_id, SlotSaveAction.FAILED, error=str(e))

            result.outcomes.append(outcome)

        if result.ok:
            logger.info("Class schedule for %s saved (%s slots)", class_date, len(result.outcomes))
        else:
            logger.warning(
                "Class schedule for %s saved with %s failed slot(s): %s",
                class_date,
                len(result.failures),
                ", ".join(f"{o.time_slot_id}: {o.error}" for o in result.failures),
            )
        return result
