from __future__ import annotations

import pytest

from src.class_attendance.class_attendance.core.enums import Category, SubCategory
from src.class_attendance.class_attendance.core.exceptions import NotFoundError, ValidationError
from src.class_attendance.class_attendance.personnel.service import PersonnelService


@pytest.fixture
def service(personnel_repo):
    return PersonnelService(personnel_repo)


def test_list_active_is_ranked_and_skips_inactive(service, personnel_repo):
    personnel_repo.add("PC 1", "PC")
    personnel_repo.add("HC 1", "HC")
    personnel_repo.add("RSI 1", "RSI")
    personnel_repo.add("HC 2", "HC", is_active=False)

    assert [p.employee_id for p in service.list_active()] == ["RSI 1", "HC 1", "PC 1"]


def test_list_all_filters_by_search_and_category(service, personnel_repo):
    personnel_repo.add("PC 9", "PC")
    personnel_repo.add("PC 10", "PC")
    personnel_repo.add("HC 1", "HC")

    assert [p.employee_id for p in service.list_all(search="pc")] == ["PC 9", "PC 10"]
    assert [p.employee_id for p in service.list_all(category="HC")] == ["HC 1"]
    assert len(service.list_all(category="all")) == 3


def test_create_defaults_name_and_drops_sub_category_outside_pc(service, personnel_repo):
    pid = service.create(employee_id="  HC 3 ", category="HC", sub_category="MT")

    person = personnel_repo.get_by_id(pid)
    assert person.employee_id == "HC 3"
    assert person.name == "HC 3"
    assert person.category == Category.HC
    assert person.sub_category is None


def test_create_keeps_pc_sub_category(service, personnel_repo):
    pid = service.create(employee_id="PC 9", name="Constable Nine", category="PC", sub_category="General Duty")

    assert personnel_repo.get_by_id(pid).sub_category == SubCategory.GENERAL_DUTY


@pytest.mark.parametrize(
    "kwargs",
    [
        {"employee_id": "   ", "category": "PC"},
        {"employee_id": "X" * 21, "category": "PC"},
        {"employee_id": "PC 1", "category": "CAPTAIN"},
        {"employee_id": "PC 1", "category": "PC", "sub_category": "Pilot"},
    ],
)
def test_create_rejects_invalid_input(service, personnel_repo, kwargs):
    with pytest.raises(ValidationError):
        service.create(**kwargs)
    assert personnel_repo.list_all() == []


def test_duplicate_employee_id_is_rejected(service, personnel_repo):
    personnel_repo.add("HC 1", "HC")

    with pytest.raises(ValidationError):
        service.create(employee_id="HC 1", category="HC")


def test_update_allows_keeping_own_employee_id(service, personnel_repo):
    person = personnel_repo.add("HC 1", "HC")

    service.update(person.personnel_id, employee_id="HC 1", name="Head Constable", category="HC")

    assert personnel_repo.get_by_id(person.personnel_id).name == "Head Constable"


def test_update_rejects_clash_with_other_person(service, personnel_repo):
    personnel_repo.add("HC 1", "HC")
    other = personnel_repo.add("HC 2", "HC")

    with pytest.raises(ValidationError):
        service.update(other.personnel_id, employee_id="HC 1", category="HC")


def test_set_active_and_delete_missing_raise_not_found(service):
    with pytest.raises(NotFoundError):
        service.set_active(42, is_active=False)
    with pytest.raises(NotFoundError):
        service.delete(42)


def test_deactivate_removes_from_roster(service, personnel_repo):
    person = personnel_repo.add("PC 1", "PC")

    service.set_active(person.personnel_id, is_active=False)

    assert service.list_active() == []
    assert [p.employee_id for p in service.list_all()] == ["PC 1"]
