from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from datetime import date, datetime

from PySide6.QtCore import QObject, Signal

from casecal.app.case_store import CaseStore, HearingInput
from casecal.app.hearing_form import HearingDraft
from casecal.app.list_query import CaseGroup, query_list
from casecal.app.sample_cases import sample_cases
from casecal.app.settings_store import (
    load_default_view,
    load_list_sort_key,
    load_list_status_filter,
)
from casecal.app.state_containers import CalendarViewState, ListViewState
from casecal.app.tracker_models import CaseEvent, CaseRecord, CaseSnapshot
from casecal.app.weekly_layout import WeekDirection, WeeklyLayout, build_weekly_layout, navigate_week


class CaseCalendarEngine(QObject):
    """Operation surface the calendar views call into.

    Reads come from the store's current snapshot; writes go through the store,
    which republishes a fresh snapshot that is forwarded on
    ``snapshot_published``.
    """

    snapshot_published = Signal(object)

    def __init__(
        self,
        store: CaseStore | None = None,
        *,
        parent: QObject | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        super().__init__(parent)
        self._logger = logger or logging.getLogger("casecal.engine")
        self._store = store if store is not None else CaseStore(parent=self)
        self._store.snapshot_published.connect(self._on_store_snapshot)

    @classmethod
    def with_sample_cases(
        cls,
        today: date | None = None,
        *,
        logger: logging.Logger | None = None,
    ) -> "CaseCalendarEngine":
        return cls(CaseStore(sample_cases(today), logger=logger), logger=logger)

    @property
    def store(self) -> CaseStore:
        return self._store

    @property
    def snapshot(self) -> CaseSnapshot:
        return self._store.snapshot

    def list_cases(self) -> tuple[CaseRecord, ...]:
        return self._store.snapshot.cases

    def list_events(self) -> tuple[CaseEvent, ...]:
        return self._store.snapshot.events

    def add_hearing(self, case_id: str, hearing: HearingInput) -> CaseEvent | None:
        return self._store.add_hearing(case_id, hearing)

    def update_hearing(
        self,
        case_id: str,
        hearing_id: str,
        fields: HearingInput,
    ) -> CaseEvent | None:
        return self._store.update_hearing(case_id, hearing_id, fields)

    def remove_hearing(self, hearing_id: str) -> bool:
        return self._store.remove_hearing(hearing_id)

    def add_tag(self, case_id: str, tag: str) -> bool:
        return self._store.add_tag(case_id, tag)

    def remove_tag(self, case_id: str, tag: str) -> bool:
        return self._store.remove_tag(case_id, tag)

    def weekly_layout(
        self,
        reference: date | datetime,
        events: Iterable[CaseEvent] | None = None,
    ) -> WeeklyLayout:
        source = self._store.snapshot.events if events is None else events
        return build_weekly_layout(reference, source)

    def navigate_week(self, current: date | datetime, direction: WeekDirection | int) -> date:
        return navigate_week(current, direction)

    def query_list(
        self,
        search: str,
        status_filter: str,
        sort_key: str,
        cases: Sequence[CaseRecord] | None = None,
        events: Iterable[CaseEvent] | None = None,
    ) -> dict[str, CaseGroup]:
        snapshot = self._store.snapshot
        return query_list(
            search,
            status_filter,
            sort_key,
            snapshot.cases if cases is None else cases,
            snapshot.events if events is None else events,
        )

    def case_by_number(self, case_number: str) -> CaseRecord | None:
        target = str(case_number or "").strip()
        for case in self._store.snapshot.cases:
            if case.case_number == target:
                return case
        return None

    def submit_draft(
        self,
        draft: HearingDraft,
        editing_event_id: str | None = None,
    ) -> CaseEvent | None:
        errors = draft.validation_errors()
        if errors:
            self._logger.info("Hearing draft rejected: %s", "; ".join(errors))
            return None
        fields = draft.to_hearing_mapping()
        target_case = self.case_by_number(draft.case_number)

        if not editing_event_id:
            if target_case is None:
                self._logger.info("Hearing draft rejected: unknown case %r", draft.case_number)
                return None
            return self._store.add_hearing(target_case.case_id, fields)

        owner = self._store.case_for_hearing(editing_event_id)
        if owner is None:
            self._logger.debug("Hearing draft ignored: hearing %r no longer exists", editing_event_id)
            return None
        if target_case is None or target_case.case_id == owner.case_id:
            return self._store.update_hearing(owner.case_id, editing_event_id, fields)

        # The case number moved the hearing to another case; it keeps its id.
        return self._store.move_hearing(editing_event_id, target_case.case_id, fields)

    def list_view_state(self) -> ListViewState:
        return ListViewState(
            status_filter=load_list_status_filter(),
            sort_key=load_list_sort_key(),
        )

    def calendar_view_state(self, today: date | None = None) -> CalendarViewState:
        return CalendarViewState(
            view=load_default_view(),
            current_week=today or date.today(),
        )

    def _on_store_snapshot(self, snapshot: CaseSnapshot) -> None:
        self.snapshot_published.emit(snapshot)
