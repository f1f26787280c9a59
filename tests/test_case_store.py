import logging
from datetime import date

import pytest

from casecal.app.case_store import CaseStore
from casecal.app.projection import project_events


def test_add_tag_trims_and_appends(store):
    assert store.add_tag("1", "  urgent ") is True
    assert store.snapshot.case_by_id("1").tags[-1] == "urgent"


def test_add_tag_is_idempotent(store):
    store.add_tag("1", "urgent")
    tags_after_first = store.snapshot.case_by_id("1").tags
    revision = store.snapshot.revision

    assert store.add_tag("1", " urgent") is False
    assert store.snapshot.case_by_id("1").tags == tags_after_first
    assert store.snapshot.revision == revision


def test_add_tag_ignores_blank_and_is_case_sensitive(store):
    assert store.add_tag("1", "   ") is False
    assert store.add_tag("1", "Contract") is True
    assert store.snapshot.case_by_id("1").tags == (
        "contract",
        "construction",
        "dispute",
        "commercial",
        "Contract",
    )


def test_remove_missing_tag_leaves_tags_unchanged(store):
    before = store.snapshot.case_by_id("2").tags

    assert store.remove_tag("2", "not-a-tag") is False
    assert store.snapshot.case_by_id("2").tags == before


def test_remove_tag(store):
    assert store.remove_tag("2", "accident") is True
    assert store.snapshot.case_by_id("2").tags == ("personal-injury", "insurance", "medical")


def test_unknown_case_is_a_silent_no_op(store, caplog):
    before = store.snapshot
    with caplog.at_level(logging.DEBUG, logger="casecal.store"):
        assert store.add_tag("missing", "x") is False
        assert store.remove_tag("missing", "x") is False
        assert store.add_hearing("missing", {"title": "Hearing"}) is None
        assert store.update_hearing("missing", "1-h1", {"title": "x"}) is None
        assert store.update_hearing("1", "missing", {"title": "x"}) is None
        assert store.remove_hearing("missing") is False

    assert store.snapshot is before
    assert "unknown case" in caplog.text


def test_add_hearing_assigns_id_and_appends_event(store, today):
    event = store.add_hearing(
        "2",
        {"title": "Pretrial Conference", "date": today.isoformat(), "startTime": "13:00"},
    )

    assert event is not None
    assert event.event_id
    matches = [row for row in store.events if row.event_id == event.event_id]
    assert len(matches) == 1
    assert matches[0].parent_id == "2"
    assert store.events[-1] == event
    assert store.snapshot.case_by_id("2").hearings[-1].hearing_id == event.event_id
    assert event.title == "2024-002: Pretrial Conference"


def test_add_hearing_replaces_colliding_id(store, today):
    event = store.add_hearing("2", {"id": "1-h1", "title": "Duplicate", "date": today})

    assert event.event_id != "1-h1"
    assert len([row for row in store.events if row.event_id == "1-h1"]) == 1


def test_add_hearing_without_title_is_rejected(store, caplog):
    before = store.snapshot
    with caplog.at_level(logging.WARNING, logger="casecal.store"):
        assert store.add_hearing("1", {"title": "  "}) is None
    assert store.snapshot is before
    assert "no title" in caplog.text


def test_update_hearing_replaces_event_in_place(store):
    event = store.update_hearing("1", "1-h2", {"status": "cancelled", "startTime": "11:30"})

    assert event.status == "cancelled"
    assert event.start_time == "11:30"
    assert [row.event_id for row in store.events] == ["1-h1", "1-h2", "1-h3", "2-h1", "2-h2"]
    assert store.events[1] == event
    hearing = store.snapshot.case_by_id("1").hearing_by_id("1-h2")
    assert hearing.status == "cancelled"
    assert hearing.title == "Evidence Review Hearing"


def test_update_hearing_keeps_its_id(store):
    event = store.update_hearing("1", "1-h1", {"id": "other", "hearing_id": "other", "title": "Renamed"})

    assert event.event_id == "1-h1"
    assert store.snapshot.case_by_id("1").hearing_by_id("other") is None


def test_update_hearing_requires_matching_case(store):
    assert store.update_hearing("2", "1-h1", {"title": "Wrong case"}) is None


def test_remove_hearing_drops_event(store):
    assert store.remove_hearing("2-h1") is True

    assert store.snapshot.event_by_id("2-h1") is None
    assert store.snapshot.case_by_id("2").hearing_by_id("2-h1") is None
    assert store.remove_hearing("2-h1") is False


def test_remove_hearing_scoped_to_case(store):
    assert store.remove_hearing("1-h1", case_id="2") is False
    assert store.remove_hearing("1-h1", case_id="1") is True


def test_every_mutation_publishes_a_new_snapshot(store, today):
    published = []
    store.snapshot_published.connect(lambda snapshot: published.append(snapshot))
    original = store.snapshot

    store.add_tag("1", "urgent")
    event = store.add_hearing("1", {"title": "Status Check", "date": today})
    store.update_hearing("1", event.event_id, {"notes": "Bring exhibits"})
    store.remove_hearing(event.event_id)
    store.remove_tag("1", "urgent")

    assert [snapshot.revision for snapshot in published] == [1, 2, 3, 4, 5]
    assert published[-1] == store.snapshot
    # Earlier snapshots are untouched by later mutations.
    assert original.revision == 0
    assert "urgent" not in original.cases[0].tags
    assert len(original.events) == 5


def test_incremental_events_match_full_projection(store, today):
    store.add_hearing("1", {"title": "Late Addition", "date": date(2026, 10, 16)})
    store.update_hearing("2", "2-h2", {"status": "rescheduled"})
    store.remove_hearing("1-h3")

    incremental = {event.event_id: event for event in store.events}
    full = {event.event_id: event for event in project_events(store.cases)}
    assert incremental == full

    rebuilt = store.rebuild_events()
    assert {event.event_id: event for event in rebuilt.events} == full


def test_load_cases_accepts_mappings():
    store = CaseStore()
    store.load_cases(
        [
            {
                "id": "9",
                "caseNumber": "2024-009",
                "title": "Estate of Lee",
                "hearings": [{"id": "9-h1", "title": "Probate Hearing", "date": "2026-10-13"}],
            }
        ]
    )

    assert [event.event_id for event in store.events] == ["9-h1"]
    assert store.events[0].title == "2024-009: Probate Hearing"


@pytest.mark.parametrize(
    "changes",
    [
        {"startTime": "14:00", "endTime": "15:00"},
        {"start_time": "14:00", "end_time": "15:00"},
        {"start_time": "14:00", "startTime": "08:00", "end_time": "15:00"},
    ],
)
def test_update_hearing_accepts_either_time_spelling(store, changes):
    event = store.update_hearing("1", "1-h2", changes)

    assert event.start_time == "14:00"
    assert event.end_time == "15:00"
    hearing = store.snapshot.case_by_id("1").hearing_by_id("1-h2")
    assert (hearing.start_time, hearing.end_time) == ("14:00", "15:00")


def test_move_hearing_publishes_one_complete_snapshot(store):
    published = []
    store.snapshot_published.connect(lambda snapshot: published.append(snapshot))

    event = store.move_hearing("1-h3", "2", {"startTime": "15:00"})

    assert len(published) == 1
    snapshot = published[0]
    assert snapshot is store.snapshot
    assert event.event_id == "1-h3"
    assert event.parent_id == "2"
    assert event.title == "2024-002: Closing Arguments"
    assert event.start_time == "15:00"
    assert snapshot.case_by_id("1").hearing_by_id("1-h3") is None
    assert snapshot.case_by_id("2").hearing_by_id("1-h3") is not None
    assert [row.event_id for row in snapshot.events].count("1-h3") == 1
    assert snapshot.event_by_id("1-h3") == event


def test_move_hearing_unknown_ids_are_no_ops(store):
    before = store.snapshot

    assert store.move_hearing("missing", "2") is None
    assert store.move_hearing("1-h3", "missing") is None
    assert store.move_hearing("1-h3", "2", {"title": " "}) is None
    assert store.snapshot is before


def test_move_hearing_to_its_own_case_is_an_update(store):
    event = store.move_hearing("1-h3", "1", {"status": "cancelled"})

    assert event.parent_id == "1"
    assert event.status == "cancelled"
    assert [row.event_id for row in store.events] == ["1-h1", "1-h2", "1-h3", "2-h1", "2-h2"]
