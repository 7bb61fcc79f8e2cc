from __future__ import annotations

import pytest

from src.class_attendance.class_attendance.attendance.workflow import MarkingWorkflow
from src.class_attendance.class_attendance.core.enums import AttendanceStatus, MarkingState
from src.class_attendance.class_attendance.core.exceptions import StoreError, ValidationError


@pytest.fixture
def roster(personnel_repo):
    return [personnel_repo.add("PC 1", "PC"), personnel_repo.add("HC 1", "HC"), personnel_repo.add("RSI 1", "RSI")]


@pytest.fixture
def slot(slots_repo):
    return slots_repo.add(8, "08:00 AM")


@pytest.fixture
def workflow(container, roster):
    wf = container.new_marking_workflow()
    wf.load_roster()
    return wf


def _statuses(attendance_repo, class_id):
    return {e.personnel_id: e.status for e in attendance_repo.list_for_class(class_id)}


def test_roster_is_in_display_order(workflow):
    assert [p.employee_id for p in workflow.roster] == ["RSI 1", "HC 1", "PC 1"]


def test_selection_without_class_is_missing(workflow, slot, jan10):
    assert workflow.state == MarkingState.NO_SELECTION

    assert workflow.select(jan10, slot.slot_id) == MarkingState.CLASS_MISSING
    assert workflow.daily_class is None


def test_clearing_selection_resets(workflow, slot, jan10):
    workflow.select(jan10, slot.slot_id)

    assert workflow.select(None, slot.slot_id) == MarkingState.NO_SELECTION
    assert workflow.class_date is None


def test_editing_requires_a_loaded_class(workflow, roster, slot, jan10):
    workflow.select(jan10, slot.slot_id)

    with pytest.raises(ValidationError):
        workflow.toggle(roster[0].personnel_id)
    with pytest.raises(ValidationError):
        workflow.save()


def test_create_class_only_when_missing(workflow, slot, jan10):
    with pytest.raises(ValidationError):
        workflow.create_class("Drill")

    workflow.select(jan10, slot.slot_id)
    created = workflow.create_class("Drill")

    assert workflow.state == MarkingState.CLASS_LOADED
    assert workflow.daily_class == created
    with pytest.raises(ValidationError):
        workflow.create_class("Again")


def test_create_class_rejects_blank_name(workflow, slot, jan10):
    workflow.select(jan10, slot.slot_id)

    with pytest.raises(ValidationError):
        workflow.create_class("   ")
    assert workflow.state == MarkingState.CLASS_MISSING


def test_mark_all_present_and_save(workflow, attendance_repo, slot, jan10):
    workflow.select(jan10, slot.slot_id)
    workflow.create_class("Drill")

    workflow.mark_all_present()
    result = workflow.save()

    assert workflow.state == MarkingState.SAVED
    assert (result.present, result.absent) == (3, 0)
    assert set(_statuses(attendance_repo, result.class_id).values()) == {AttendanceStatus.PRESENT}


def test_save_writes_absent_for_everyone_not_ticked(workflow, attendance_repo, roster, slot, jan10):
    pc1, hc1, rsi1 = roster
    workflow.select(jan10, slot.slot_id)
    workflow.create_class("Drill")

    assert workflow.toggle(hc1.personnel_id) is True
    result = workflow.save()

    assert (result.present, result.absent) == (1, 2)
    assert _statuses(attendance_repo, result.class_id) == {
        pc1.personnel_id: AttendanceStatus.ABSENT,
        hc1.personnel_id: AttendanceStatus.PRESENT,
        rsi1.personnel_id: AttendanceStatus.ABSENT,
    }


def test_saving_twice_is_idempotent(workflow, attendance_repo, roster, slot, jan10):
    workflow.select(jan10, slot.slot_id)
    workflow.create_class("Drill")
    workflow.set_present([roster[0].personnel_id])

    workflow.save()
    first = _statuses(attendance_repo, workflow.daily_class.class_id)
    workflow.save()

    assert _statuses(attendance_repo, workflow.daily_class.class_id) == first
    assert attendance_repo.count() == 3


def test_reload_shows_saved_present_set(container, workflow, roster, slot, jan10):
    workflow.select(jan10, slot.slot_id)
    workflow.create_class("Drill")
    workflow.set_present([roster[1].personnel_id, 999])
    workflow.save()

    again = container.new_marking_workflow()
    again.load_roster()

    assert again.select(jan10, slot.slot_id) == MarkingState.CLASS_LOADED
    assert again.present_ids == frozenset({roster[1].personnel_id})


def test_toggle_rejects_personnel_off_roster(workflow, slot, jan10):
    workflow.select(jan10, slot.slot_id)
    workflow.create_class("Drill")

    with pytest.raises(ValidationError):
        workflow.toggle(999)


def test_failed_save_returns_to_editing_and_keeps_selection(workflow, attendance_repo, roster, slot, jan10, monkeypatch):
    workflow.select(jan10, slot.slot_id)
    workflow.create_class("Drill")
    workflow.mark_all_present()

    def broken(events):
        raise StoreError("write timed out")

    monkeypatch.setattr(attendance_repo, "upsert_many", broken)

    with pytest.raises(StoreError):
        workflow.save()

    assert workflow.state == MarkingState.EDITING
    assert workflow.last_error == "write timed out"
    assert len(workflow.present_ids) == 3
    assert attendance_repo.count() == 0


def test_failed_load_keeps_previous_state(workflow, classes_repo, slot, jan10, monkeypatch):
    workflow.select(jan10, slot.slot_id)
    workflow.create_class("Drill")
    loaded = workflow.daily_class

    def broken(**kwargs):
        raise StoreError("server has gone away")

    monkeypatch.setattr(classes_repo, "find_for_date_and_slot", broken)

    with pytest.raises(StoreError):
        workflow.select(jan10, slot.slot_id)

    assert workflow.state == MarkingState.CLASS_LOADED
    assert workflow.daily_class == loaded
    assert workflow.last_error == "server has gone away"


def test_stale_load_is_dropped(container, slots_repo, classes_repo, slot, jan10, monkeypatch):
    workflow = container.new_marking_workflow()
    workflow.load_roster()
    later = slots_repo.add(11, "11:00 AM")
    classes_repo.create(class_date=jan10, time_slot_id=later.slot_id, class_name="Law")
    real_find = classes_repo.find_for_date_and_slot

    def find_then_switch(*, class_date, time_slot_id):
        found = real_find(class_date=class_date, time_slot_id=time_slot_id)
        if time_slot_id == slot.slot_id:
            # A newer selection lands while this load is still in flight.
            monkeypatch.setattr(classes_repo, "find_for_date_and_slot", real_find)
            workflow.select(jan10, later.slot_id)
        return found

    monkeypatch.setattr(classes_repo, "find_for_date_and_slot", find_then_switch)

    workflow.select(jan10, slot.slot_id)

    assert workflow.time_slot_id == later.slot_id
    assert workflow.state == MarkingState.CLASS_LOADED
    assert workflow.daily_class.class_name == "Law"


def test_rename_loaded_class(workflow, slot, jan10):
    workflow.select(jan10, slot.slot_id)
    workflow.create_class("Drill")

    workflow.rename_class("Parade")

    assert workflow.daily_class.class_name == "Parade"
