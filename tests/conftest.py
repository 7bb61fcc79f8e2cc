from __future__ import annotations

from datetime import date, time
from typing import Optional

import pytest

from src.class_attendance.class_attendance.attendance.model import AttendanceEvent, AttendanceHistoryRow
from src.class_attendance.class_attendance.auth.service import AuthService
from src.class_attendance.class_attendance.classes.model import ClassInstance, ClassListing
from src.class_attendance.class_attendance.container import wire
from src.class_attendance.class_attendance.personnel.model import Personnel, parse_category
from src.class_attendance.class_attendance.timeslots.model import TimeSlot


class InMemoryPersonnel:
    def __init__(self):
        self._rows: dict[int, Personnel] = {}
        self._id = 0

    def add(self, employee_id: str, category: str, *, sub_category=None, is_active: bool = True) -> Personnel:
        self._id += 1
        person = Personnel(
            personnel_id=self._id,
            employee_id=employee_id,
            name=employee_id,
            category=parse_category(category),
            sub_category=sub_category,
            is_active=is_active,
        )
        self._rows[self._id] = person
        return person

    def list_all(self):
        return list(self._rows.values())

    def list_active(self):
        return [p for p in self._rows.values() if p.is_active]

    def get_by_id(self, personnel_id: int) -> Optional[Personnel]:
        return self._rows.get(personnel_id)

    def get_by_employee_id(self, employee_id: str) -> Optional[Personnel]:
        return next((p for p in self._rows.values() if p.employee_id == employee_id), None)

    def create(self, *, employee_id, name, category, sub_category):
        self._id += 1
        self._rows[self._id] = Personnel(self._id, employee_id, name, category, sub_category, True)
        return self._id

    def update(self, personnel_id, *, employee_id, name, category, sub_category):
        current = self._rows.get(personnel_id)
        if not current:
            return False
        self._rows[personnel_id] = Personnel(personnel_id, employee_id, name, category, sub_category, current.is_active)
        return True

    def set_active(self, personnel_id, *, is_active):
        current = self._rows.get(personnel_id)
        if not current:
            return False
        self._rows[personnel_id] = Personnel(
            current.personnel_id, current.employee_id, current.name, current.category, current.sub_category, is_active
        )
        return True

    def delete(self, personnel_id):
        return self._rows.pop(personnel_id, None) is not None


class InMemoryTimeSlots:
    def __init__(self):
        self._rows: dict[int, TimeSlot] = {}
        self._id = 0

    def add(self, hour: int, label: str, *, is_active: bool = True) -> TimeSlot:
        slot_id = self.create(slot_time=time(hour, 0), label=label, sort_order=self.max_sort_order() + 1)
        if not is_active:
            self.set_active(slot_id, is_active=False)
        return self._rows[slot_id]

    def list_all(self):
        return sorted(self._rows.values(), key=lambda s: (s.sort_order, s.slot_id))

    def list_active(self):
        return [s for s in self.list_all() if s.is_active]

    def get_by_id(self, slot_id):
        return self._rows.get(slot_id)

    def max_sort_order(self):
        return max((s.sort_order for s in self._rows.values()), default=0)

    def create(self, *, slot_time, label, sort_order):
        self._id += 1
        self._rows[self._id] = TimeSlot(self._id, slot_time, label, sort_order, True)
        return self._id

    def set_active(self, slot_id, *, is_active):
        current = self._rows.get(slot_id)
        if not current:
            return False
        self._rows[slot_id] = TimeSlot(current.slot_id, current.time, current.label, current.sort_order, is_active)
        return True

    def delete(self, slot_id):
        return self._rows.pop(slot_id, None) is not None


class InMemoryClasses:
    def __init__(self, slots: InMemoryTimeSlots):
        self._slots = slots
        self._rows: dict[int, ClassInstance] = {}
        self._id = 0

    def get_by_id(self, class_id):
        return self._rows.get(class_id)

    def find_for_date_and_slot(self, *, class_date, time_slot_id):
        return next(
            (c for c in self._rows.values() if c.class_date == class_date and c.time_slot_id == time_slot_id),
            None,
        )

    def list_for_date(self, class_date):
        return [c for c in self._rows.values() if c.class_date == class_date]

    def list_for_slot(self, time_slot_id):
        rows = [c for c in self._rows.values() if c.time_slot_id == time_slot_id]
        return sorted(rows, key=lambda c: c.class_date, reverse=True)

    def search_by_name(self, query):
        needle = query.casefold()
        hits = sorted(
            (c for c in self._rows.values() if needle in c.class_name.casefold()),
            key=lambda c: c.class_date,
            reverse=True,
        )
        out = []
        for c in hits:
            slot = self._slots.get_by_id(c.time_slot_id)
            out.append(ClassListing(c.class_id, c.class_date, c.time_slot_id, c.class_name, slot.label if slot else None))
        return out

    def create(self, *, class_date, time_slot_id, class_name):
        existing = self.find_for_date_and_slot(class_date=class_date, time_slot_id=time_slot_id)
        if existing:
            return existing
        self._id += 1
        self._rows[self._id] = ClassInstance(self._id, class_date, time_slot_id, class_name)
        return self._rows[self._id]

    def rename(self, class_id, *, class_name):
        current = self._rows.get(class_id)
        if not current:
            return False
        self._rows[class_id] = ClassInstance(current.class_id, current.class_date, current.time_slot_id, class_name)
        return True


class InMemoryAttendance:
    def __init__(self, classes: InMemoryClasses, slots: InMemoryTimeSlots):
        self._classes = classes
        self._slots = slots
        self._rows: dict[tuple[int, int], AttendanceEvent] = {}
        self.upsert_calls = 0

    def list_for_class(self, class_id):
        return [e for e in self._rows.values() if e.daily_class_id == class_id]

    def list_for_classes(self, class_ids):
        wanted = set(class_ids)
        return [e for e in self._rows.values() if e.daily_class_id in wanted]

    def upsert_many(self, events):
        self.upsert_calls += 1
        for e in events:
            self._rows[e.key] = e
        return len(events)

    def history_for_personnel(self, personnel_id):
        # Newest write first, like ORDER BY created_at DESC.
        out = []
        for e in reversed(list(self._rows.values())):
            if e.personnel_id != personnel_id:
                continue
            cls = self._classes.get_by_id(e.daily_class_id)
            slot = self._slots.get_by_id(cls.time_slot_id) if cls else None
            out.append(
                AttendanceHistoryRow(
                    personnel_id=e.personnel_id,
                    daily_class_id=e.daily_class_id,
                    status=e.status,
                    class_date=cls.class_date if cls else None,
                    class_name=cls.class_name if cls else None,
                    slot_label=slot.label if slot else None,
                )
            )
        return out

    def count(self) -> int:
        return len(self._rows)


@pytest.fixture
def personnel_repo():
    return InMemoryPersonnel()


@pytest.fixture
def slots_repo():
    return InMemoryTimeSlots()


@pytest.fixture
def classes_repo(slots_repo):
    return InMemoryClasses(slots_repo)


@pytest.fixture
def attendance_repo(classes_repo, slots_repo):
    return InMemoryAttendance(classes_repo, slots_repo)


@pytest.fixture
def container(personnel_repo, slots_repo, classes_repo, attendance_repo):
    return wire(
        personnel_repo=personnel_repo,
        slots_repo=slots_repo,
        classes_repo=classes_repo,
        attendance_repo=attendance_repo,
        auth_service=AuthService(username="admin", password="secret"),
    )


@pytest.fixture
def jan10():
    return date(2024, 1, 10)
