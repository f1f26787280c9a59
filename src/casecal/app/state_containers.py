from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from casecal.app.palette import DEFAULT_TAG_COLOR, TagColor


@dataclass(slots=True)
class ExpansionState:
    expanded_case_ids: set[str] = field(default_factory=set)
    expanded_hearing_ids: set[str] = field(default_factory=set)

    def toggle_case(self, case_id: str) -> bool:
        return _toggle(self.expanded_case_ids, case_id)

    def toggle_hearing(self, hearing_id: str) -> bool:
        return _toggle(self.expanded_hearing_ids, hearing_id)

    def is_case_expanded(self, case_id: str) -> bool:
        return case_id in self.expanded_case_ids

    def is_hearing_expanded(self, hearing_id: str) -> bool:
        return hearing_id in self.expanded_hearing_ids


def _toggle(target: set[str], key: str) -> bool:
    if key in target:
        target.discard(key)
        return False
    target.add(key)
    return True


@dataclass(slots=True)
class TagEditState:
    editing_case_id: str = ""
    new_tag_text: str = ""
    selected_color: TagColor = DEFAULT_TAG_COLOR

    def begin(self, case_id: str) -> None:
        self.editing_case_id = case_id
        self.new_tag_text = ""

    def reset(self) -> None:
        self.editing_case_id = ""
        self.new_tag_text = ""
        self.selected_color = DEFAULT_TAG_COLOR


@dataclass(slots=True)
class ListViewState:
    search_text: str = ""
    status_filter: str = "all"
    sort_key: str = "date"
    expansion: ExpansionState = field(default_factory=ExpansionState)
    tag_edit: TagEditState = field(default_factory=TagEditState)


@dataclass(slots=True)
class CalendarViewState:
    view: str = "weekly"
    current_week: date = field(default_factory=date.today)
    editing_event_id: str = ""
