from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Category, SubCategory
from .model import Personnel


class PersonnelRepository(Protocol):
    """Repository interface for Personnel.

    Note (DIP): services depend on this interface, not on a concrete store.
    """

    def list_all(self) -> Sequence[Personnel]:
        raise NotImplementedError

    def list_active(self) -> Sequence[Personnel]:
        raise NotImplementedError

    def get_by_id(self, personnel_id: int) -> Optional[Personnel]:
        raise NotImplementedError

    def get_by_employee_id(self, employee_id: str) -> Optional[Personnel]:
        raise NotImplementedError

    def create(
        self,
        *,
        employee_id: str,
        name: str,
        category: Category,
        sub_category: Optional[SubCategory],
    ) -> int:
        raise NotImplementedError

    def update(
        self,
        personnel_id: int,
        *,
        employee_id: str,
        name: str,
        category: Category,
        sub_category: Optional[SubCategory],
    ) -> bool:
        raise NotImplementedError

    def set_active(self, personnel_id: int, *, is_active: bool) -> bool:
        raise NotImplementedError

    def delete(self, personnel_id: int) -> bool:
        """Delete a person; the store cascades their attendance rows."""

        raise NotImplementedError
