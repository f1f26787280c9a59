from __future__ import annotations

from casecal.app.case_store import CaseStore
from casecal.app.hearing_form import HearingDraft, HearingDraftError
from casecal.app.list_query import CaseGroup, query_list
from casecal.app.palette import TagColor, status_style, tag_color_for
from casecal.app.projection import project_events
from casecal.app.tracker_models import CaseEvent, CaseRecord, CaseSnapshot, Hearing
from casecal.app.weekly_layout import WeeklyLayout, build_weekly_layout, navigate_week, week_days
from casecal.core.engine import CaseCalendarEngine

__all__ = [
    "CaseCalendarEngine",
    "CaseEvent",
    "CaseGroup",
    "CaseRecord",
    "CaseSnapshot",
    "CaseStore",
    "Hearing",
    "HearingDraft",
    "HearingDraftError",
    "TagColor",
    "WeeklyLayout",
    "build_weekly_layout",
    "navigate_week",
    "project_events",
    "query_list",
    "status_style",
    "tag_color_for",
    "week_days",
]
