from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from types import MappingProxyType
from typing import Literal

from casecal.app.tracker_models import CaseEvent

WeekDirection = Literal["prev", "next"]

DAY_NAMES: tuple[str, ...] = ("Mon", "Tue", "Wed", "Thu", "Fri")
_BUSINESS_DAY_COUNT = 5
_NOON_HOUR = 12
_WEEK_STEPS = {"prev": -1, "next": 1}


def _as_date(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def week_days(reference: date | datetime) -> tuple[date, ...]:
    """Monday through Friday of the week containing ``reference``.

    Sunday belongs to the week that started six days earlier.
    """
    day = _as_date(reference)
    monday = day - timedelta(days=day.weekday())
    return tuple(monday + timedelta(days=offset) for offset in range(_BUSINESS_DAY_COUNT))


def navigate_week(current: date | datetime, direction: WeekDirection | int) -> date:
    """Shift ``current`` by one week. Unrecognized directions leave it unchanged."""
    if isinstance(direction, str):
        step = _WEEK_STEPS.get(direction.strip().casefold(), 0)
    elif isinstance(direction, int) and not isinstance(direction, bool):
        step = direction if direction in (-1, 1) else 0
    else:
        step = 0
    return _as_date(current) + timedelta(days=7 * step)


def events_for_day(events: Iterable[CaseEvent], day: date | datetime) -> tuple[CaseEvent, ...]:
    target = _as_date(day)
    return tuple(event for event in events if _as_date(event.date) == target)


def start_hour(event: CaseEvent) -> int | None:
    head = str(event.start_time or "").split(":", 1)[0].strip()
    try:
        return int(head)
    except ValueError:
        return None


@dataclass(frozen=True, slots=True)
class HalfDayEvents:
    morning: tuple[CaseEvent, ...] = ()
    afternoon: tuple[CaseEvent, ...] = ()


def partition_by_half_day(day_events: Sequence[CaseEvent]) -> HalfDayEvents:
    morning: list[CaseEvent] = []
    afternoon: list[CaseEvent] = []
    for event in day_events:
        hour = start_hour(event)
        if hour is not None and hour < _NOON_HOUR:
            morning.append(event)
        else:
            afternoon.append(event)
    return HalfDayEvents(morning=tuple(morning), afternoon=tuple(afternoon))


@dataclass(frozen=True, slots=True)
class WeeklyLayout:
    reference_date: date
    week_days: tuple[date, ...]
    # Read-only views keyed by weekday; left out of the hash.
    events_by_day: Mapping[date, tuple[CaseEvent, ...]] = field(hash=False)
    morning: Mapping[date, tuple[CaseEvent, ...]] = field(hash=False)
    afternoon: Mapping[date, tuple[CaseEvent, ...]] = field(hash=False)

    def day_name(self, day: date) -> str:
        return DAY_NAMES[self.week_days.index(day)]

    def is_today(self, day: date, *, today: date | None = None) -> bool:
        return day == (today or date.today())


def build_weekly_layout(reference: date | datetime, events: Iterable[CaseEvent]) -> WeeklyLayout:
    rows = tuple(events)
    days = week_days(reference)
    events_by_day: dict[date, tuple[CaseEvent, ...]] = {}
    morning: dict[date, tuple[CaseEvent, ...]] = {}
    afternoon: dict[date, tuple[CaseEvent, ...]] = {}
    for day in days:
        day_events = events_for_day(rows, day)
        halves = partition_by_half_day(day_events)
        events_by_day[day] = day_events
        morning[day] = halves.morning
        afternoon[day] = halves.afternoon
    return WeeklyLayout(
        reference_date=_as_date(reference),
        week_days=days,
        events_by_day=MappingProxyType(events_by_day),
        morning=MappingProxyType(morning),
        afternoon=MappingProxyType(afternoon),
    )


def week_heading(layout: WeeklyLayout) -> str:
    first_day = layout.week_days[0]
    return f"{first_day:%B} {first_day.year}"


def format_time_12h(time_24: str) -> str:
    hours, _sep, minutes = str(time_24 or "").partition(":")
    try:
        hour_24 = int(hours)
    except ValueError:
        return str(time_24 or "")
    if hour_24 == 0:
        hour_12 = 12
    elif hour_24 > 12:
        hour_12 = hour_24 - 12
    else:
        hour_12 = hour_24
    suffix = "PM" if hour_24 >= 12 else "AM"
    return f"{hour_12}:{minutes or '00'} {suffix}"


def time_range_label(event: CaseEvent) -> str:
    return f"{format_time_12h(event.start_time)} - {format_time_12h(event.end_time)}"
