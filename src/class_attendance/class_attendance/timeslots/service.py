from __future__ import annotations

import logging
from datetime import time
from typing import Optional, Union

from ..common.datetime_utils import format_slot_label, parse_clock_time
from ..common.validators import require_name
from ..core.constants import SLOT_LABEL_MAX_LENGTH
from ..core.exceptions import NotFoundError, ValidationError
from .model import TimeSlot
from .repository import TimeSlotRepository

logger = logging.getLogger(__name__)


class TimeSlotService:
    def __init__(self, slots: TimeSlotRepository):
        self._slots = slots

    def list_all(self) -> list[TimeSlot]:
        return list(self._slots.list_all())

    def list_active(self) -> list[TimeSlot]:
        return list(self._slots.list_active())

    def get(self, slot_id: int) -> TimeSlot:
        slot = self._slots.get_by_id(int(slot_id))
        if not slot:
            raise NotFoundError("Time slot not found")
        return slot

    def add(self, *, slot_time: Union[time, str, None], label: Optional[str] = None) -> int:
        """Append a slot after the current last one.

        A blank label defaults to the 12-hour rendering of the time.
        """

        if slot_time is None or (isinstance(slot_time, str) and not slot_time.strip()):
            raise ValidationError("Time is required")
        if isinstance(slot_time, str):
            try:
                slot_time = parse_clock_time(slot_time)
            except ValueError:
                raise ValidationError("Invalid time (HH:MM)")

        clean_label = require_name((label or "").strip() or format_slot_label(slot_time), "Label", SLOT_LABEL_MAX_LENGTH)
        sort_order = max(0, self._slots.max_sort_order()) + 1

        slot_id = self._slots.create(slot_time=slot_time, label=clean_label, sort_order=sort_order)
        logger.info("Time slot %r added (id=%s, order=%s)", clean_label, slot_id, sort_order)
        return slot_id

    def toggle_active(self, slot_id: int) -> bool:
        slot = self.get(slot_id)
        self._slots.set_active(slot.slot_id, is_active=not slot.is_active)
        return not slot.is_active

    def delete(self, slot_id: int) -> None:
        if not self._slots.delete(int(slot_id)):
            raise NotFoundError("Time slot not found")
        logger.info("Time slot id=%s deleted with its classes", slot_id)
