from __future__ import annotations

from enum import Enum


class Category(str, Enum):
    """Personnel category, in rank order."""

    RSI = "RSI"
    ARSI = "ARSI"
    HC = "HC"
    PC = "PC"


class SubCategory(str, Enum):
    """Sub-category, only meaningful for PC."""

    PSO = "PSO"
    MT = "MT"
    STAFF = "Staff"
    STF = "STF"
    GENERAL_DUTY = "General Duty"


class AttendanceStatus(str, Enum):
    PRESENT = "present"
    ABSENT = "absent"


class MarkingState(str, Enum):
    """States of one marking session for a (date, slot) selection."""

    NO_SELECTION = "no_selection"
    SLOT_CHOSEN = "slot_chosen"
    CLASS_MISSING = "class_missing"
    CLASS_LOADED = "class_loaded"
    EDITING = "editing"
    SAVING = "saving"
    SAVED = "saved"


class SearchState(str, Enum):
    NOT_SEARCHED = "not_searched"
    EMPTY = "empty"
    FOUND = "found"


class SlotSaveAction(str, Enum):
    """What a full-day schedule save did for one slot."""

    CREATED = "created"
    RENAMED = "renamed"
    UNCHANGED = "unchanged"
    SKIPPED = "skipped"
    FAILED = "failed"
