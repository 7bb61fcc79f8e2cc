from __future__ import annotations

from dataclasses import dataclass
from datetime import time


@dataclass(frozen=True)
class TimeSlot:
    """Domain entity: a recurring period of the day classes are held in."""

    slot_id: int
    time: time
    label: str
    sort_order: int
    is_active: bool = True

    def to_dict(self) -> dict:
        return {
            "slot_id": self.slot_id,
            "time": self.time.strftime("%H:%M"),
            "label": self.label,
            "sort_order": self.sort_order,
            "is_active": self.is_active,
        }
