from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Literal

from casecal.app.tracker_models import CaseEvent, CaseRecord

StatusFilter = Literal["all", "new", "rescheduled", "cancelled"]
SortKey = Literal["date", "case", "title"]

STATUS_FILTER_OPTIONS: tuple[tuple[str, str], ...] = (
    ("all", "All"),
    ("new", "New"),
    ("rescheduled", "Rescheduled"),
    ("cancelled", "Cancelled"),
)
SORT_KEY_OPTIONS: tuple[tuple[str, str], ...] = (
    ("date", "Date"),
    ("case", "Case"),
    ("title", "Title"),
)
_STATUS_FILTERS = tuple(value for value, _label in STATUS_FILTER_OPTIONS)
_SORT_KEYS = tuple(value for value, _label in SORT_KEY_OPTIONS)


@dataclass(frozen=True, slots=True)
class CaseGroup:
    case_number: str
    case_data: CaseRecord
    hearings: tuple[CaseEvent, ...]


def normalize_status_filter(value: str | None) -> StatusFilter:
    normalized = str(value or "").strip().casefold()
    if normalized == "canceled":
        normalized = "cancelled"
    if normalized in _STATUS_FILTERS:
        return normalized  # type: ignore[return-value]
    return "all"


def normalize_sort_key(value: str | None) -> SortKey:
    normalized = str(value or "").strip().casefold()
    if normalized in _SORT_KEYS:
        return normalized  # type: ignore[return-value]
    return "date"


def case_matches_search(case: CaseRecord, search: str) -> bool:
    needle = str(search or "").strip().casefold()
    if not needle:
        return True
    fields = [case.title, case.description, case.case_number, *case.tags]
    for hearing in case.hearings:
        fields.append(hearing.title)
        fields.append(hearing.notes)
    return any(needle in str(value or "").casefold() for value in fields)


def matching_cases(search: str, cases: Iterable[CaseRecord]) -> tuple[CaseRecord, ...]:
    return tuple(case for case in cases if case_matches_search(case, search))


def event_matches_status(event: CaseEvent, status_filter: StatusFilter) -> bool:
    if status_filter == "all":
        return True
    return event.status == status_filter


def sort_events(events: Iterable[CaseEvent], sort_key: SortKey) -> list[CaseEvent]:
    rows = list(events)
    if sort_key == "case":
        rows.sort(key=lambda event: event.case_number)
    elif sort_key == "title":
        rows.sort(key=lambda event: event.title)
    else:
        # Zero padded "HH:MM" strings order the same way the clock does.
        rows.sort(key=lambda event: (event.date, event.start_time))
    return rows


def query_list(
    search: str,
    status_filter: str,
    sort_key: str,
    cases: Sequence[CaseRecord],
    events: Iterable[CaseEvent],
) -> dict[str, CaseGroup]:
    """Filter, sort and group events for the list view.

    The result maps case id to its group, ordered by where each case first
    appears in the sorted events. Cases that match the search but keep no
    events after the status filter are left out.
    """
    active_filter = normalize_status_filter(status_filter)
    active_sort = normalize_sort_key(sort_key)
    cases_by_id = {case.case_id: case for case in matching_cases(search, cases)}

    retained = (
        event
        for event in events
        if event_matches_status(event, active_filter) and event.parent_id in cases_by_id
    )

    buckets: dict[str, list[CaseEvent]] = {}
    first_case_numbers: dict[str, str] = {}
    for event in sort_events(retained, active_sort):
        if event.parent_id not in buckets:
            buckets[event.parent_id] = []
            first_case_numbers[event.parent_id] = event.case_number
        buckets[event.parent_id].append(event)

    return {
        case_id: CaseGroup(
            case_number=first_case_numbers[case_id],
            case_data=cases_by_id[case_id],
            hearings=tuple(rows),
        )
        for case_id, rows in buckets.items()
    }


def format_hearing_date(day: date, *, today: date | None = None) -> str:
    reference = today or date.today()
    if day == reference:
        return "Today"
    if day == reference + timedelta(days=1):
        return "Tomorrow"
    return f"{day:%a}, {day:%b} {day.day}"


def hearing_count_label(count: int) -> str:
    return f"{count} hearing" if count == 1 else f"{count} hearings"
