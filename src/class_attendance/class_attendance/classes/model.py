from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..common.datetime_utils import to_iso_date
from ..core.enums import SlotSaveAction
from ..core.exceptions import PartialBatchError


@dataclass(frozen=True)
class ClassInstance:
    """Domain entity: one class held on one date in one slot.

    (class_date, time_slot_id) is a natural key.
    """

    class_id: int
    class_date: date
    time_slot_id: int
    class_name: str

    def to_dict(self) -> dict:
        return {
            "class_id": self.class_id,
            "class_date": to_iso_date(self.class_date),
            "time_slot_id": self.time_slot_id,
            "class_name": self.class_name,
        }


@dataclass(frozen=True)
class ClassListing:
    """Read-model: a class joined with its slot label (label is None if the slot is gone)."""

    class_id: int
    class_date: Optional[date]
    time_slot_id: Optional[int]
    class_name: str
    slot_label: Optional[str] = None


@dataclass(frozen=True)
class SlotSaveOutcome:
    time_slot_id: int
    action: SlotSaveAction
    class_id: Optional[int] = None
    error: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "time_slot_id": self.time_slot_id,
            "action": self.action.value,
            "class_id": self.class_id,
            "error": self.error,
        }


@dataclass
class BatchSaveResult:
    class_date: date
    outcomes: list[SlotSaveOutcome] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return all(o.error is None for o in self.outcomes)

    @property
    def failures(self) -> list[SlotSaveOutcome]:
        return [o for o in self.outcomes if o.error is not None]

    def raise_for_failures(self) -> None:
        if not self.ok:
            raise PartialBatchError(self)

    def to_dict(self) -> dict:
        return {
            "class_date": to_iso_date(self.class_date),
            "ok": self.ok,
            "outcomes": [o.to_dict() for o in self.outcomes],
        }
