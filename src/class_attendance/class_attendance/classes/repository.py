from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import ClassInstance, ClassListing


class ClassRepository(Protocol):
    def get_by_id(self, class_id: int) -> Optional[ClassInstance]:
        raise NotImplementedError

    def find_for_date_and_slot(self, *, class_date: date, time_slot_id: int) -> Optional[ClassInstance]:
        raise NotImplementedError

    def list_for_date(self, class_date: date) -> Sequence[ClassInstance]:
        raise NotImplementedError

    def list_for_slot(self, time_slot_id: int) -> Sequence[ClassInstance]:
        """Classes of one slot, newest date first."""

        raise NotImplementedError

    def search_by_name(self, query: str) -> Sequence[ClassListing]:
        """Case-insensitive substring match on class_name, newest date first, joined with slot label."""

        raise NotImplementedError

    def create(self, *, class_date: date, time_slot_id: int, class_name: str) -> ClassInstance:
        """Create the class for (class_date, time_slot_id).

        If one already exists for the pair, that instance is returned unchanged.
        """

        raise NotImplementedError

    def rename(self, class_id: int, *, class_name: str) -> bool:
        raise NotImplementedError
