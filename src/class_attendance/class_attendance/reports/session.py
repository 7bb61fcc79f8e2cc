from __future__ import annotations

from datetime import date
from typing import Optional

from ..common.sequencing import LatestOnly
from ..core.enums import SearchState
from .model import ClassSearchResult, DateWisePivot, PersonHistory, SlotSummary
from .service import ReportService


class ReportSession:
    """Report state for one client session.

    Each pipeline keeps only its newest result; a refresh that finishes after
    a newer one was started is dropped.
    """

    def __init__(self, reports: ReportService):
        self._reports = reports
        self._date: LatestOnly[DateWisePivot] = LatestOnly()
        self._person: LatestOnly[PersonHistory] = LatestOnly()
        self._slot: LatestOnly[SlotSummary] = LatestOnly()
        self._search: LatestOnly[ClassSearchResult] = LatestOnly()

    @property
    def date_wise(self) -> Optional[DateWisePivot]:
        return self._date.value

    @property
    def person_wise(self) -> Optional[PersonHistory]:
        return self._person.value

    @property
    def slot_wise(self) -> Optional[SlotSummary]:
        return self._slot.value

    @property
    def class_search(self) -> ClassSearchResult:
        return self._search.value or ClassSearchResult(query="", state=SearchState.NOT_SEARCHED)

    def show_date(self, class_date: Optional[date]) -> bool:
        if class_date is None:
            self._date.clear()
            return True
        return self._date.run(self._reports.date_wise, class_date)

    def show_person(self, personnel_id: Optional[int]) -> bool:
        if not personnel_id:
            self._person.clear()
            return True
        return self._person.run(self._reports.person_wise, personnel_id)

    def show_slot(self, time_slot_id: Optional[int]) -> bool:
        if not time_slot_id:
            self._slot.clear()
            return True
        return self._slot.run(self._reports.slot_wise, time_slot_id)

    def search(self, query: Optional[str]) -> bool:
        return self._search.run(self._reports.class_search, query)
