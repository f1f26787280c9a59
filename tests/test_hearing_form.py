from datetime import date

import pytest

from casecal.app.hearing_form import HearingDraft, HearingDraftError, split_event_title
from casecal.app.tracker_models import CaseEvent


def test_split_event_title():
    assert split_event_title("2024-001: Initial Hearing") == ("2024-001", "Initial Hearing")
    assert split_event_title("Untitled") == ("", "Untitled")
    assert split_event_title("2024-001: Motion: Part 2") == ("2024-001", "Motion: Part 2")


def test_draft_from_event_prefills_fields():
    event = CaseEvent(
        event_id="1-h2",
        title="2024-001: Evidence Review Hearing",
        date=date(2026, 10, 14),
        parent_id="1",
        case_number="2024-001",
        notes="Schedule moved",
        start_time="11:00",
        end_time="12:30",
        status="rescheduled",
    )

    draft = HearingDraft.from_event(event)

    assert draft.case_number == "2024-001"
    assert draft.title == "Evidence Review Hearing"
    assert draft.status == "rescheduled"
    assert draft.is_valid


def test_draft_requires_title_and_case_number():
    draft = HearingDraft(case_number=" ", title="")

    assert draft.validation_errors() == ("Case number is required.", "Hearing title is required.")
    with pytest.raises(HearingDraftError) as excinfo:
        draft.to_hearing_mapping()
    assert len(excinfo.value.errors) == 2


def test_draft_mapping_is_normalized():
    draft = HearingDraft(
        case_number="2024-001",
        title="  Status Conference ",
        notes=" bring binder ",
        date=date(2026, 10, 16),
        start_time="8:05",
        end_time="nonsense",
        status="canceled",
    )

    assert draft.to_hearing_mapping() == {
        "title": "Status Conference",
        "notes": "bring binder",
        "date": "2026-10-16",
        "start_time": "08:05",
        "end_time": "10:00",
        "status": "cancelled",
    }
