from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..common.validators import require_max_length, require_name
from ..core.constants import EMPLOYEE_ID_MAX_LENGTH, PERSONNEL_NAME_MAX_LENGTH
from ..core.enums import Category, SubCategory
from ..core.exceptions import NotFoundError, ValidationError
from .model import Personnel
from .ranking import rank_personnel
from .repository import PersonnelRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PersonnelForm:
    employee_id: str
    name: str
    category: Category
    sub_category: Optional[SubCategory]


class PersonnelService:
    """Use case: roster management and ranked listings."""

    def __init__(self, personnel: PersonnelRepository):
        self._personnel = personnel

    def list_active(self) -> list[Personnel]:
        return rank_personnel(self._personnel.list_active())

    def list_all(self, *, search: str = "", category: Optional[str] = None) -> list[Personnel]:
        needle = (search or "").strip().casefold()
        wanted = None if not category or category == "all" else category

        def matches(p: Personnel) -> bool:
            if wanted is not None and p.category != wanted:
                return False
            if not needle:
                return True
            return needle in p.employee_id.casefold() or needle in p.name.casefold()

        return rank_personnel(p for p in self._personnel.list_all() if matches(p))

    def get(self, personnel_id: int) -> Personnel:
        person = self._personnel.get_by_id(int(personnel_id))
        if not person:
            raise NotFoundError("Personnel not found")
        return person

    @staticmethod
    def _clean(
        *,
        employee_id: str,
        name: Optional[str],
        category: str,
        sub_category: Optional[str],
    ) -> PersonnelForm:
        code = require_name(employee_id, "Employee ID", EMPLOYEE_ID_MAX_LENGTH)
        clean_name = require_max_length((name or "").strip() or code, "Name", PERSONNEL_NAME_MAX_LENGTH)

        try:
            cat = Category(category)
        except ValueError:
            raise ValidationError(f"Unknown category: {category!r}")

        sub: Optional[SubCategory] = None
        if cat == Category.PC and sub_category:
            try:
                sub = SubCategory(sub_category)
            except ValueError:
                raise ValidationError(f"Unknown sub-category: {sub_category!r}")

        return PersonnelForm(employee_id=code, name=clean_name, category=cat, sub_category=sub)

    def create(
        self,
        *,
        employee_id: str,
        name: Optional[str] = None,
        category: str,
        sub_category: Optional[str] = None,
    ) -> int:
        form = self._clean(employee_id=employee_id, name=name, category=category, sub_category=sub_category)
        if self._personnel.get_by_employee_id(form.employee_id):
            raise ValidationError("Employee ID already exists")

        personnel_id = self._personnel.create(
            employee_id=form.employee_id,
            name=form.name,
            category=form.category,
            sub_category=form.sub_category,
        )
        logger.info("Personnel %s created (id=%s)", form.employee_id, personnel_id)
        return personnel_id

    def update(
        self,
        personnel_id: int,
        *,
        employee_id: str,
        name: Optional[str] = None,
        category: str,
        sub_category: Optional[str] = None,
    ) -> None:
        self.get(personnel_id)
        form = self._clean(employee_id=employee_id, name=name, category=category, sub_category=sub_category)

        clash = self._personnel.get_by_employee_id(form.employee_id)
        if clash and clash.personnel_id != int(personnel_id):
            raise ValidationError("Employee ID already exists")

        self._personnel.update(
            int(personnel_id),
            employee_id=form.employee_id,
            name=form.name,
            category=form.category,
            sub_category=form.sub_category,
        )

    def set_active(self, personnel_id: int, *, is_active: bool) -> None:
        if not self._personnel.set_active(int(personnel_id), is_active=bool(is_active)):
            raise NotFoundError("Personnel not found")

    def delete(self, personnel_id: int) -> None:
        if not self._personnel.delete(int(personnel_id)):
            raise NotFoundError("Personnel not found")
        logger.info("Personnel id=%s deleted with their attendance", personnel_id)
