from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from ..core.enums import Category, SubCategory


@dataclass(frozen=True)
class Personnel:
    """Domain entity: one tracked individual.

    ``category`` and ``sub_category`` are enum members when the stored token
    is known; an unknown token is kept as the raw string so listings never
    fail on it.
    """

    personnel_id: int
    employee_id: str
    name: str
    category: Union[Category, str]
    sub_category: Optional[Union[SubCategory, str]] = None
    is_active: bool = True

    def to_dict(self) -> dict:
        return {
            "personnel_id": self.personnel_id,
            "employee_id": self.employee_id,
            "name": self.name,
            "category": _token(self.category),
            "sub_category": _token(self.sub_category) if self.sub_category else None,
            "is_active": self.is_active,
        }


def _token(value) -> str:
    return value.value if isinstance(value, (Category, SubCategory)) else str(value)


def parse_category(raw: str) -> Union[Category, str]:
    try:
        return Category(raw)
    except ValueError:
        return raw


def parse_sub_category(raw: Optional[str]) -> Optional[Union[SubCategory, str]]:
    if not raw:
        return None
    try:
        return SubCategory(raw)
    except ValueError:
        return raw
