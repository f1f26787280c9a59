from __future__ import annotations

from collections.abc import Collection, Iterable, Sequence
from dataclasses import replace
from uuid import uuid4

from casecal.app.tracker_models import CaseEvent, CaseRecord, Hearing


def event_title(case_number: str, hearing_title: str) -> str:
    return f"{case_number}: {hearing_title}"


def event_for_hearing(case: CaseRecord, hearing: Hearing) -> CaseEvent:
    return CaseEvent(
        event_id=hearing.hearing_id,
        title=event_title(case.case_number, hearing.title),
        date=hearing.date,
        parent_id=case.case_id,
        case_number=case.case_number,
        description=case.description,
        notes=hearing.notes,
        start_time=hearing.start_time,
        end_time=hearing.end_time,
        status=hearing.status,
    )


def project_events(cases: Iterable[CaseRecord]) -> tuple[CaseEvent, ...]:
    """Flatten every case's hearings into events, case-major and in storage order."""
    return tuple(
        event_for_hearing(case, hearing)
        for case in cases
        for hearing in case.hearings
    )


def ensure_hearing_id(hearing: Hearing, taken_ids: Collection[str] = ()) -> Hearing:
    hearing_id = str(hearing.hearing_id or "").strip()
    if hearing_id and hearing_id not in taken_ids:
        return hearing
    fresh_id = uuid4().hex
    while fresh_id in taken_ids:
        fresh_id = uuid4().hex
    return replace(hearing, hearing_id=fresh_id)


def append_event(events: Sequence[CaseEvent], event: CaseEvent) -> tuple[CaseEvent, ...]:
    return (*events, event)


def replace_event(events: Sequence[CaseEvent], event: CaseEvent) -> tuple[CaseEvent, ...]:
    return tuple(event if row.event_id == event.event_id else row for row in events)


def drop_event(events: Sequence[CaseEvent], event_id: str) -> tuple[CaseEvent, ...]:
    return tuple(row for row in events if row.event_id != event_id)
