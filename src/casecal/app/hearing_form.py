from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from casecal.app.tracker_models import (
    DEFAULT_END_TIME,
    DEFAULT_START_TIME,
    CaseEvent,
    HearingStatus,
    normalize_clock_time,
    normalize_hearing_status,
    parse_calendar_date,
)

_TITLE_SEPARATOR = ": "


class HearingDraftError(ValueError):
    """Raised when a hearing draft is missing a required field."""

    def __init__(self, errors: tuple[str, ...]) -> None:
        super().__init__("; ".join(errors) or "Hearing draft is invalid.")
        self.errors = errors


def split_event_title(title: str) -> tuple[str, str]:
    """Split ``"<case number>: <hearing title>"`` into its two halves.

    Titles without the separator have no case number part.
    """
    text = str(title or "")
    case_number, separator, hearing_title = text.partition(_TITLE_SEPARATOR)
    if not separator:
        return "", text
    return case_number, hearing_title


@dataclass(slots=True)
class HearingDraft:
    case_number: str = ""
    title: str = ""
    description: str = ""
    notes: str = ""
    date: date = field(default_factory=date.today)
    start_time: str = DEFAULT_START_TIME
    end_time: str = DEFAULT_END_TIME
    status: HearingStatus = "new"

    @classmethod
    def from_event(cls, event: CaseEvent) -> "HearingDraft":
        title_case_number, hearing_title = split_event_title(event.title)
        return cls(
            case_number=event.case_number or title_case_number,
            title=hearing_title,
            description=event.description,
            notes=event.notes,
            date=event.date,
            start_time=event.start_time,
            end_time=event.end_time,
            status=event.status,
        )

    def validation_errors(self) -> tuple[str, ...]:
        errors: list[str] = []
        if not str(self.case_number or "").strip():
            errors.append("Case number is required.")
        if not str(self.title or "").strip():
            errors.append("Hearing title is required.")
        return tuple(errors)

    @property
    def is_valid(self) -> bool:
        return not self.validation_errors()

    def to_hearing_mapping(self) -> dict[str, str]:
        errors = self.validation_errors()
        if errors:
            raise HearingDraftError(errors)
        draft_date = parse_calendar_date(self.date) or date.today()
        return {
            "title": str(self.title).strip(),
            "notes": str(self.notes or "").strip(),
            "date": draft_date.isoformat(),
            "start_time": normalize_clock_time(self.start_time, default=DEFAULT_START_TIME),
            "end_time": normalize_clock_time(self.end_time, default=DEFAULT_END_TIME),
            "status": normalize_hearing_status(self.status),
        }
