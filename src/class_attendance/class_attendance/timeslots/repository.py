from __future__ import annotations

from datetime import time
from typing import Optional, Protocol, Sequence

from .model import TimeSlot


class TimeSlotRepository(Protocol):
    def list_all(self) -> Sequence[TimeSlot]:
        """All slots ordered by sort_order."""

        raise NotImplementedError

    def list_active(self) -> Sequence[TimeSlot]:
        raise NotImplementedError

    def get_by_id(self, slot_id: int) -> Optional[TimeSlot]:
        raise NotImplementedError

    def max_sort_order(self) -> int:
        raise NotImplementedError

    def create(self, *, slot_time: time, label: str, sort_order: int) -> int:
        raise NotImplementedError

    def set_active(self, slot_id: int, *, is_active: bool) -> bool:
        raise NotImplementedError

    def delete(self, slot_id: int) -> bool:
        """Delete a slot; the store cascades its classes and their attendance."""

        raise NotImplementedError
