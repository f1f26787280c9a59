from datetime import date, datetime

from casecal.app.tracker_models import (
    CaseEvent,
    CaseRecord,
    Hearing,
    normalize_clock_time,
    normalize_hearing_status,
    normalize_tags,
    parse_calendar_date,
)


def test_normalize_hearing_status_accepts_aliases():
    assert normalize_hearing_status("Cancelled") == "cancelled"
    assert normalize_hearing_status("canceled") == "cancelled"
    assert normalize_hearing_status(" rescheduled ") == "rescheduled"
    assert normalize_hearing_status("bogus") == "new"
    assert normalize_hearing_status(None) == "new"


def test_normalize_clock_time_pads_and_falls_back():
    assert normalize_clock_time("8:30") == "08:30"
    assert normalize_clock_time("14:05:00") == "14:05"
    assert normalize_clock_time("25:00") == "09:00"
    assert normalize_clock_time("", default="10:00") == "10:00"


def test_parse_calendar_date_ignores_time_of_day():
    assert parse_calendar_date("2026-10-14T23:59:00Z") == date(2026, 10, 14)
    assert parse_calendar_date(datetime(2026, 10, 14, 8, 0)) == date(2026, 10, 14)
    assert parse_calendar_date("not a date") is None


def test_normalize_tags_trims_and_dedupes_exactly():
    assert normalize_tags([" contract ", "contract", "Contract", ""]) == ("contract", "Contract")


def test_case_from_mapping_accepts_camel_case_keys():
    case = CaseRecord.from_mapping(
        {
            "id": "7",
            "caseNumber": "2024-007",
            "title": "Doe v. Roe",
            "tags": ["appeal"],
            "hearings": [
                {
                    "id": "7-h1",
                    "title": "Oral Argument",
                    "date": "2026-10-15",
                    "startTime": "9:15",
                    "endTime": "10:00",
                    "status": "rescheduled",
                }
            ],
        }
    )

    assert case.case_id == "7"
    assert case.case_number == "2024-007"
    assert case.hearings == (
        Hearing(
            hearing_id="7-h1",
            title="Oral Argument",
            date=date(2026, 10, 15),
            start_time="09:15",
            end_time="10:00",
            status="rescheduled",
        ),
    )


def test_hearing_without_id_gets_fresh_id():
    first = Hearing.from_mapping({"title": "Status Conference", "date": "2026-10-15"})
    second = Hearing.from_mapping({"title": "Status Conference", "date": "2026-10-15"})

    assert first.hearing_id
    assert first.hearing_id != second.hearing_id


def test_event_mapping_shape():
    event = CaseEvent.from_mapping(
        {
            "id": "1-h1",
            "title": "2024-001: Initial Hearing",
            "date": "2026-10-14",
            "parentId": "1",
            "caseNumber": "2024-001",
        }
    )

    mapping = event.to_mapping()
    assert mapping["event_id"] == "1-h1"
    assert mapping["parent_id"] == "1"
    assert mapping["event_type"] == "hearing"
    assert mapping["date"] == "2026-10-14"


def test_case_to_mapping_serializes_nested_hearings(cases):
    mapping = cases[1].to_mapping()

    assert mapping["case_number"] == "2024-002"
    assert mapping["tags"] == ["personal-injury", "accident", "insurance", "medical"]
    assert [row["hearing_id"] for row in mapping["hearings"]] == ["2-h1", "2-h2"]
    assert mapping["hearings"][0]["status"] == "cancelled"
    assert CaseRecord.from_mapping(mapping) == cases[1]
