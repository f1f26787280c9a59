from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Literal
from uuid import uuid4


HearingStatus = Literal["new", "rescheduled", "cancelled"]

HEARING_STATUSES: tuple[HearingStatus, ...] = ("new", "rescheduled", "cancelled")
_HEARING_STATUS_ALIASES: dict[str, HearingStatus] = {
    "new": "new",
    "scheduled": "new",
    "rescheduled": "rescheduled",
    "re_scheduled": "rescheduled",
    "moved": "rescheduled",
    "cancelled": "cancelled",
    "canceled": "cancelled",
}

EVENT_TYPE_HEARING = "hearing"
DEFAULT_START_TIME = "09:00"
DEFAULT_END_TIME = "10:00"

_CLOCK_TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})(?::\d{2})?$")


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    return str(value).strip()


def _safe_uuid(value: Any) -> str:
    normalized = _as_text(value)
    return normalized or uuid4().hex


def _first_present(value: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in value and value.get(key) is not None:
            return value.get(key)
    return None


def normalize_hearing_status(value: Any) -> HearingStatus:
    raw = _as_text(value).replace("-", "_").replace(" ", "_").casefold()
    return _HEARING_STATUS_ALIASES.get(raw, "new")


def hearing_status_label(value: Any) -> str:
    return normalize_hearing_status(value).title()


def normalize_clock_time(value: Any, *, default: str = DEFAULT_START_TIME) -> str:
    text = _as_text(value)
    match = _CLOCK_TIME_PATTERN.fullmatch(text)
    if match is None:
        return default
    hour = int(match.group(1))
    minute = int(match.group(2))
    if hour > 23 or minute > 59:
        return default
    return f"{hour:02d}:{minute:02d}"


def parse_calendar_date(value: Any) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = _as_text(value)
    if not text:
        return None
    try:
        return date.fromisoformat(text[:10])
    except Exception:
        pass
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except Exception:
        return None


def normalize_tags(value: Any) -> tuple[str, ...]:
    if isinstance(value, (list, tuple)):
        candidates = value
    elif value is None or value == "":
        candidates = ()
    else:
        candidates = (value,)

    tags: list[str] = []
    for candidate in candidates:
        tag = _as_text(candidate)
        if not tag or tag in tags:
            continue
        tags.append(tag)
    return tuple(tags)


@dataclass(frozen=True, slots=True)
class Hearing:
    hearing_id: str
    title: str
    date: date
    notes: str = ""
    start_time: str = DEFAULT_START_TIME
    end_time: str = DEFAULT_END_TIME
    status: HearingStatus = "new"

    @classmethod
    def from_mapping(cls, value: Mapping[str, Any] | None) -> "Hearing":
        if not isinstance(value, Mapping):
            return cls(hearing_id=uuid4().hex, title="", date=date.today())
        return cls(
            hearing_id=_safe_uuid(_first_present(value, "hearing_id", "id")),
            title=_as_text(value.get("title")),
            date=parse_calendar_date(value.get("date")) or date.today(),
            notes=_as_text(value.get("notes")),
            start_time=normalize_clock_time(
                _first_present(value, "start_time", "startTime"),
                default=DEFAULT_START_TIME,
            ),
            end_time=normalize_clock_time(
                _first_present(value, "end_time", "endTime"),
                default=DEFAULT_END_TIME,
            ),
            status=normalize_hearing_status(value.get("status")),
        )

    def to_mapping(self) -> dict[str, str]:
        return {
            "hearing_id": _as_text(self.hearing_id),
            "title": _as_text(self.title),
            "notes": _as_text(self.notes),
            "date": self.date.isoformat(),
            "start_time": normalize_clock_time(self.start_time, default=DEFAULT_START_TIME),
            "end_time": normalize_clock_time(self.end_time, default=DEFAULT_END_TIME),
            "status": normalize_hearing_status(self.status),
        }


@dataclass(frozen=True, slots=True)
class CaseRecord:
    case_id: str
    case_number: str
    title: str
    description: str = ""
    tags: tuple[str, ...] = ()
    hearings: tuple[Hearing, ...] = ()

    @classmethod
    def from_mapping(cls, value: Mapping[str, Any] | None) -> "CaseRecord":
        if not isinstance(value, Mapping):
            return cls(case_id=uuid4().hex, case_number="", title="")
        raw_hearings = value.get("hearings")
        hearings: list[Hearing] = []
        if isinstance(raw_hearings, (list, tuple)):
            for item in raw_hearings:
                if isinstance(item, Hearing):
                    hearings.append(item)
                elif isinstance(item, Mapping):
                    hearings.append(Hearing.from_mapping(item))
        return cls(
            case_id=_safe_uuid(_first_present(value, "case_id", "id")),
            case_number=_as_text(_first_present(value, "case_number", "caseNumber")),
            title=_as_text(value.get("title")),
            description=_as_text(value.get("description")),
            tags=normalize_tags(value.get("tags")),
            hearings=tuple(hearings),
        )

    def to_mapping(self) -> dict[str, Any]:
        return {
            "case_id": _as_text(self.case_id),
            "case_number": _as_text(self.case_number),
            "title": _as_text(self.title),
            "description": _as_text(self.description),
            "tags": list(normalize_tags(self.tags)),
            "hearings": [hearing.to_mapping() for hearing in self.hearings],
        }

    def hearing_by_id(self, hearing_id: str) -> Hearing | None:
        for hearing in self.hearings:
            if hearing.hearing_id == hearing_id:
                return hearing
        return None


@dataclass(frozen=True, slots=True)
class CaseEvent:
    """A hearing flattened together with the case fields the views display."""

    event_id: str
    title: str
    date: date
    parent_id: str
    case_number: str = ""
    description: str = ""
    notes: str = ""
    start_time: str = DEFAULT_START_TIME
    end_time: str = DEFAULT_END_TIME
    status: HearingStatus = "new"
    event_type: str = EVENT_TYPE_HEARING

    @classmethod
    def from_mapping(cls, value: Mapping[str, Any] | None) -> "CaseEvent":
        if not isinstance(value, Mapping):
            return cls(event_id=uuid4().hex, title="", date=date.today(), parent_id="")
        return cls(
            event_id=_safe_uuid(_first_present(value, "event_id", "id")),
            title=_as_text(value.get("title")),
            date=parse_calendar_date(value.get("date")) or date.today(),
            parent_id=_as_text(_first_present(value, "parent_id", "parentId")),
            case_number=_as_text(_first_present(value, "case_number", "caseNumber")),
            description=_as_text(value.get("description")),
            notes=_as_text(value.get("notes")),
            start_time=normalize_clock_time(
                _first_present(value, "start_time", "startTime"),
                default=DEFAULT_START_TIME,
            ),
            end_time=normalize_clock_time(
                _first_present(value, "end_time", "endTime"),
                default=DEFAULT_END_TIME,
            ),
            status=normalize_hearing_status(value.get("status")),
        )

    def to_mapping(self) -> dict[str, str]:
        return {
            "event_id": _as_text(self.event_id),
            "title": _as_text(self.title),
            "description": _as_text(self.description),
            "notes": _as_text(self.notes),
            "date": self.date.isoformat(),
            "start_time": normalize_clock_time(self.start_time, default=DEFAULT_START_TIME),
            "end_time": normalize_clock_time(self.end_time, default=DEFAULT_END_TIME),
            "event_type": EVENT_TYPE_HEARING,
            "status": normalize_hearing_status(self.status),
            "case_number": _as_text(self.case_number),
            "parent_id": _as_text(self.parent_id),
        }


@dataclass(frozen=True, slots=True)
class CaseSnapshot:
    revision: int = 0
    cases: tuple[CaseRecord, ...] = ()
    events: tuple[CaseEvent, ...] = ()

    def case_by_id(self, case_id: str) -> CaseRecord | None:
        for case in self.cases:
            if case.case_id == case_id:
                return case
        return None

    def event_by_id(self, event_id: str) -> CaseEvent | None:
        for event in self.events:
            if event.event_id == event_id:
                return event
        return None
