from __future__ import annotations

import json
import os
import sys
from datetime import date, datetime, timezone
from pathlib import Path
from threading import Lock

from casecal.app.tracker_models import CaseSnapshot


_ENGINE_DEBUG_ENV = "CASECAL_ENGINE_DEBUG"
_ENGINE_DEBUG_LOG_ENV = "CASECAL_ENGINE_DEBUG_LOG"
_STDERR_PREFIX = "[engine-debug] "
_MAX_TEXT_LENGTH = 120
_LOCK = Lock()
_SEQUENCE = 0


def engine_debug_enabled() -> bool:
    return str(os.getenv(_ENGINE_DEBUG_ENV, "") or "").strip().casefold() in {
        "1",
        "true",
        "yes",
        "on",
        "y",
    }


def snapshot_delta(before: CaseSnapshot, after: CaseSnapshot) -> dict[str, object]:
    """Summarize which cases and events differ between two published snapshots.

    Ids are listed in the order they appear in ``after`` (or ``before`` for
    removals), so a trace line reads the same way the views render.
    """
    before_cases = {case.case_id: case for case in before.cases}
    after_case_ids = {case.case_id for case in after.cases}
    before_events = {event.event_id: event for event in before.events}
    after_events = {event.event_id: event for event in after.events}
    return {
        "revision": after.revision,
        "previous_revision": before.revision,
        "case_count": len(after.cases),
        "event_count": len(after.events),
        "cases_changed": [
            case.case_id for case in after.cases if before_cases.get(case.case_id) != case
        ],
        "cases_removed": [case_id for case_id in before_cases if case_id not in after_case_ids],
        "events_added": [event_id for event_id in after_events if event_id not in before_events],
        "events_changed": [
            event_id
            for event_id, event in after_events.items()
            if event_id in before_events and before_events[event_id] != event
        ],
        "events_removed": [
            event_id for event_id in before_events if event_id not in after_events
        ],
    }


def trace_snapshot(
    event: str,
    before: CaseSnapshot,
    after: CaseSnapshot,
    **payload: object,
) -> None:
    if not engine_debug_enabled():
        return
    engine_debug(event, **{**snapshot_delta(before, after), **payload})


def engine_debug(event: str, **payload: object) -> None:
    if not engine_debug_enabled():
        return
    global _SEQUENCE
    with _LOCK:
        _SEQUENCE += 1
        sequence = _SEQUENCE
    line = json.dumps(
        {
            "seq": sequence,
            "ts": datetime.now(timezone.utc).isoformat(timespec="milliseconds"),
            "event": str(event or "").strip() or "unknown",
            "data": _compact_value(payload),
        },
        ensure_ascii=True,
        default=str,
    )
    if _append_to_trace_file(line):
        return
    try:
        sys.stderr.write(f"{_STDERR_PREFIX}{line}\n")
        sys.stderr.flush()
    except OSError:
        pass


def _append_to_trace_file(line: str) -> bool:
    target = str(os.getenv(_ENGINE_DEBUG_LOG_ENV, "") or "").strip()
    if not target:
        return False
    try:
        destination = Path(target).expanduser()
        destination.parent.mkdir(parents=True, exist_ok=True)
        with destination.open("a", encoding="utf-8") as handle:
            handle.write(f"{line}\n")
    except OSError:
        return False
    return True


def _compact_value(value: object) -> object:
    # Hearing notes can be long free text; trace lines only need a prefix.
    if isinstance(value, dict):
        return {str(key): _compact_value(raw) for key, raw in value.items()}
    if isinstance(value, (list, tuple)):
        return [_compact_value(entry) for entry in value]
    if isinstance(value, (set, frozenset)):
        return [_compact_value(entry) for entry in sorted(value, key=str)]
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if isinstance(value, str) and len(value) > _MAX_TEXT_LENGTH:
        return f"{value[:_MAX_TEXT_LENGTH]}..."
    return value
