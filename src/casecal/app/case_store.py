from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import replace
from typing import Any

from PySide6.QtCore import QObject, Signal

from casecal.app.engine_debug import trace_snapshot
from casecal.app.projection import (
    append_event,
    drop_event,
    ensure_hearing_id,
    event_for_hearing,
    project_events,
    replace_event,
)
from casecal.app.tracker_models import CaseEvent, CaseRecord, CaseSnapshot, Hearing

CaseInput = CaseRecord | Mapping[str, Any]
HearingInput = Hearing | Mapping[str, Any]


def _coerce_case(value: CaseInput) -> CaseRecord:
    if isinstance(value, CaseRecord):
        return value
    return CaseRecord.from_mapping(value)


_HEARING_FIELD_ALIASES = {
    "id": "hearing_id",
    "startTime": "start_time",
    "endTime": "end_time",
}


def _hearing_fields(value: HearingInput) -> dict[str, Any]:
    if isinstance(value, Hearing):
        return value.to_mapping()
    if not isinstance(value, Mapping):
        return {}
    fields: dict[str, Any] = {}
    for key, raw in value.items():
        name = _HEARING_FIELD_ALIASES.get(key, key)
        # The snake_case spelling wins when a patch carries both.
        if name != key and name in value:
            continue
        fields[name] = raw
    return fields


class CaseStore(QObject):
    """Owns the case/hearing hierarchy and publishes immutable snapshots.

    Every state change builds a complete ``CaseSnapshot`` and swaps it in with a
    single assignment before ``snapshot_published`` fires, so readers only ever
    see the old snapshot or the new one. Unknown case or hearing ids are
    ignored; nothing here raises for expected conditions.
    """

    snapshot_published = Signal(object)

    def __init__(
        self,
        cases: Iterable[CaseInput] = (),
        *,
        parent: QObject | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        super().__init__(parent)
        self._logger = logger or logging.getLogger("casecal.store")
        normalized = tuple(_coerce_case(case) for case in cases)
        self._snapshot = CaseSnapshot(
            revision=0,
            cases=normalized,
            events=project_events(normalized),
        )

    @property
    def snapshot(self) -> CaseSnapshot:
        return self._snapshot

    @property
    def cases(self) -> tuple[CaseRecord, ...]:
        return self._snapshot.cases

    @property
    def events(self) -> tuple[CaseEvent, ...]:
        return self._snapshot.events

    def load_cases(self, cases: Iterable[CaseInput]) -> CaseSnapshot:
        normalized = tuple(_coerce_case(case) for case in cases)
        return self._publish(normalized, project_events(normalized), "load_cases", count=len(normalized))

    def rebuild_events(self) -> CaseSnapshot:
        cases = self._snapshot.cases
        return self._publish(cases, project_events(cases), "rebuild_events")

    def add_tag(self, case_id: str, tag: str) -> bool:
        case = self._snapshot.case_by_id(case_id)
        if case is None:
            self._logger.debug("add_tag ignored: unknown case %r", case_id)
            return False
        normalized = str(tag or "").strip()
        if not normalized or normalized in case.tags:
            return False
        updated = replace(case, tags=(*case.tags, normalized))
        self._publish(
            self._replace_case(updated),
            self._snapshot.events,
            "add_tag",
            case_id=case_id,
            tag=normalized,
        )
        return True

    def remove_tag(self, case_id: str, tag: str) -> bool:
        case = self._snapshot.case_by_id(case_id)
        if case is None:
            self._logger.debug("remove_tag ignored: unknown case %r", case_id)
            return False
        if tag not in case.tags:
            return False
        tags = list(case.tags)
        tags.remove(tag)
        updated = replace(case, tags=tuple(tags))
        self._publish(
            self._replace_case(updated),
            self._snapshot.events,
            "remove_tag",
            case_id=case_id,
            tag=tag,
        )
        return True

    def add_hearing(self, case_id: str, hearing: HearingInput) -> CaseEvent | None:
        case = self._snapshot.case_by_id(case_id)
        if case is None:
            self._logger.debug("add_hearing ignored: unknown case %r", case_id)
            return None
        fields = _hearing_fields(hearing)
        if not str(fields.get("title") or "").strip():
            self._logger.warning("add_hearing ignored: hearing for case %r has no title", case_id)
            return None
        fields["hearing_id"] = str(fields.get("hearing_id") or "").strip()
        # Ids already used by another hearing are replaced, not merged.
        created = ensure_hearing_id(Hearing.from_mapping(fields), self._hearing_ids())

        updated_case = replace(case, hearings=(*case.hearings, created))
        event = event_for_hearing(updated_case, created)
        self._publish(
            self._replace_case(updated_case),
            append_event(self._snapshot.events, event),
            "add_hearing",
            case_id=case_id,
            hearing_id=created.hearing_id,
        )
        return event

    def update_hearing(
        self,
        case_id: str,
        hearing_id: str,
        changes: HearingInput,
    ) -> CaseEvent | None:
        case = self._snapshot.case_by_id(case_id)
        if case is None:
            self._logger.debug("update_hearing ignored: unknown case %r", case_id)
            return None
        existing = case.hearing_by_id(hearing_id)
        if existing is None:
            self._logger.debug(
                "update_hearing ignored: case %r has no hearing %r", case_id, hearing_id
            )
            return None

        updated = self._merged_hearing(existing, changes, "update_hearing")
        if updated is None:
            return None
        if updated == existing:
            return self._snapshot.event_by_id(hearing_id) or event_for_hearing(case, existing)

        updated_case = replace(
            case,
            hearings=tuple(
                updated if row.hearing_id == hearing_id else row for row in case.hearings
            ),
        )
        event = event_for_hearing(updated_case, updated)
        self._publish(
            self._replace_case(updated_case),
            replace_event(self._snapshot.events, event),
            "update_hearing",
            case_id=case_id,
            hearing_id=hearing_id,
        )
        return event

    def remove_hearing(self, hearing_id: str, *, case_id: str | None = None) -> bool:
        owner = self._owner_of(hearing_id, case_id)
        if owner is None:
            self._logger.debug("remove_hearing ignored: unknown hearing %r", hearing_id)
            return False
        updated_case = replace(
            owner,
            hearings=tuple(row for row in owner.hearings if row.hearing_id != hearing_id),
        )
        self._publish(
            self._replace_case(updated_case),
            drop_event(self._snapshot.events, hearing_id),
            "remove_hearing",
            case_id=owner.case_id,
            hearing_id=hearing_id,
        )
        return True

    def move_hearing(
        self,
        hearing_id: str,
        to_case_id: str,
        changes: HearingInput | None = None,
    ) -> CaseEvent | None:
        """Move a hearing (keeping its id) to another case in a single snapshot.

        ``changes`` are merged onto the hearing the same way ``update_hearing``
        merges them. Moving to the current owner is a plain update.
        """
        owner = self._owner_of(hearing_id, None)
        if owner is None:
            self._logger.debug("move_hearing ignored: unknown hearing %r", hearing_id)
            return None
        if owner.case_id == to_case_id:
            return self.update_hearing(owner.case_id, hearing_id, changes or {})
        target = self._snapshot.case_by_id(to_case_id)
        if target is None:
            self._logger.debug("move_hearing ignored: unknown case %r", to_case_id)
            return None
        existing = owner.hearing_by_id(hearing_id)
        moved = self._merged_hearing(existing, changes or {}, "move_hearing")
        if moved is None:
            return None

        updated_owner = replace(
            owner,
            hearings=tuple(row for row in owner.hearings if row.hearing_id != hearing_id),
        )
        updated_target = replace(target, hearings=(*target.hearings, moved))
        replacements = {owner.case_id: updated_owner, target.case_id: updated_target}
        cases = tuple(replacements.get(case.case_id, case) for case in self._snapshot.cases)
        event = event_for_hearing(updated_target, moved)
        self._publish(
            cases,
            append_event(drop_event(self._snapshot.events, hearing_id), event),
            "move_hearing",
            case_id=owner.case_id,
            to_case_id=target.case_id,
            hearing_id=hearing_id,
        )
        return event

    def case_for_hearing(self, hearing_id: str) -> CaseRecord | None:
        return self._owner_of(hearing_id, None)

    def _merged_hearing(
        self,
        existing: Hearing,
        changes: HearingInput,
        action: str,
    ) -> Hearing | None:
        fields = {**existing.to_mapping(), **_hearing_fields(changes)}
        fields["hearing_id"] = existing.hearing_id
        merged = Hearing.from_mapping(fields)
        if not merged.title:
            self._logger.warning(
                "%s ignored: hearing %r would lose its title", action, existing.hearing_id
            )
            return None
        return merged

    def _owner_of(self, hearing_id: str, case_id: str | None) -> CaseRecord | None:
        for case in self._snapshot.cases:
            if case_id is not None and case.case_id != case_id:
                continue
            if case.hearing_by_id(hearing_id) is not None:
                return case
        return None

    def _hearing_ids(self) -> set[str]:
        return {
            hearing.hearing_id
            for case in self._snapshot.cases
            for hearing in case.hearings
        }

    def _replace_case(self, updated: CaseRecord) -> tuple[CaseRecord, ...]:
        return tuple(
            updated if case.case_id == updated.case_id else case
            for case in self._snapshot.cases
        )

    def _publish(
        self,
        cases: tuple[CaseRecord, ...],
        events: tuple[CaseEvent, ...],
        action: str,
        **payload: object,
    ) -> CaseSnapshot:
        previous = self._snapshot
        snapshot = CaseSnapshot(
            revision=previous.revision + 1,
            cases=cases,
            events=events,
        )
        self._snapshot = snapshot
        trace_snapshot(f"store.{action}", previous, snapshot, **payload)
        self.snapshot_published.emit(snapshot)
        return snapshot
