from __future__ import annotations

from dataclasses import dataclass
from typing import assert_never

from casecal.app.tracker_models import HearingStatus, hearing_status_label


@dataclass(frozen=True, slots=True)
class TagColor:
    base: str
    hover: str

    @property
    def css_classes(self) -> str:
        return f"{self.base} {self.hover}"


TAG_COLORS: tuple[TagColor, ...] = (
    TagColor("bg-blue-100 text-blue-800", "hover:bg-blue-200 hover:text-blue-900"),
    TagColor("bg-green-100 text-green-800", "hover:bg-green-200 hover:text-green-900"),
    TagColor("bg-yellow-100 text-yellow-800", "hover:bg-yellow-200 hover:text-yellow-900"),
    TagColor("bg-red-100 text-red-800", "hover:bg-red-200 hover:text-red-900"),
    TagColor("bg-purple-100 text-purple-800", "hover:bg-purple-200 hover:text-purple-900"),
    TagColor("bg-pink-100 text-pink-800", "hover:bg-pink-200 hover:text-pink-900"),
    TagColor("bg-indigo-100 text-indigo-800", "hover:bg-indigo-200 hover:text-indigo-900"),
    TagColor("bg-orange-100 text-orange-800", "hover:bg-orange-200 hover:text-orange-900"),
    TagColor("bg-teal-100 text-teal-800", "hover:bg-teal-200 hover:text-teal-900"),
    TagColor("bg-cyan-100 text-cyan-800", "hover:bg-cyan-200 hover:text-cyan-900"),
)
DEFAULT_TAG_COLOR = TAG_COLORS[0]
_TAG_CHOICE_COUNT = 5


def tag_color_for(tag: str) -> TagColor:
    """Pick the palette entry for a tag from the sum of its character codes.

    Collisions between tags are expected; the only guarantee is that the same
    string always lands on the same entry.
    """
    code_sum = sum(ord(char) for char in str(tag or ""))
    return TAG_COLORS[code_sum % len(TAG_COLORS)]


def tag_color_choices() -> tuple[TagColor, ...]:
    return TAG_COLORS[:_TAG_CHOICE_COUNT]


@dataclass(frozen=True, slots=True)
class StatusStyle:
    label: str
    badge: str
    opacity: float
    strike: bool = False


def status_style(status: HearingStatus) -> StatusStyle:
    label = hearing_status_label(status)
    match status:
        case "new":
            return StatusStyle(label, "text-green-700 bg-green-100 border-green-300", 1.0)
        case "rescheduled":
            return StatusStyle(label, "text-yellow-700 bg-yellow-100 border-yellow-300", 0.75)
        case "cancelled":
            return StatusStyle(label, "text-red-700 bg-red-100 border-red-300", 0.5, strike=True)
        case _:
            assert_never(status)
