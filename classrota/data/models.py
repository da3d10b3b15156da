"""
Pydantic models for the class rotation data model.

Dates are calendar days (no time component). Input rows come from a tabular
export, so most fields tolerate nulls and blank strings; those are normalised
here rather than in the engine.

Event types:
- class     - duty-bearing, consumes lessons from the catalog
- other     - duty-bearing, no lessons
- flex      - no duties, carries a free-text note
- holiday   - no duties
- cancelled - no duties
"""

from __future__ import annotations

import datetime as dt
import logging
from enum import Enum
from typing import Any, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Constants and Enums
# =============================================================================

DEFAULT_DUTY_LABELS = ["Opening Prayer", "Spiritual Thought", "Closing Prayer"]


class EventType(str, Enum):
    """Kind of calendar entry."""
    CLASS = "class"
    FLEX = "flex"
    HOLIDAY = "holiday"
    CANCELLED = "cancelled"
    OTHER = "other"

    @property
    def is_duty_bearing(self) -> bool:
        """Whether a teacher and devotional are resolved for this type."""
        return _DUTY_BEARING[self]

    @property
    def consumes_lessons(self) -> bool:
        """Whether this type pulls items from the content catalog."""
        return self is EventType.CLASS


_DUTY_BEARING: dict[EventType, bool] = {
    EventType.CLASS: True,
    EventType.OTHER: True,
    EventType.FLEX: False,
    EventType.HOLIDAY: False,
    EventType.CANCELLED: False,
}

_missing = set(EventType) - set(_DUTY_BEARING)
if _missing:
    raise RuntimeError(f"EventType members without a duty classification: {sorted(_missing)}")


def is_duty_bearing(event_type: Optional[EventType]) -> bool:
    """Missing types never carry duties."""
    return event_type is not None and event_type.is_duty_bearing


def format_date(value: dt.date) -> str:
    """Render a date as M/D/YYYY without zero padding."""
    return f"{value.month}/{value.day}/{value.year}"


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


# =============================================================================
# Content Models
# =============================================================================

class LessonItem(BaseModel):
    """A single pre-authored lesson in the content catalog."""
    model_config = ConfigDict(extra="allow")

    title: str = Field(min_length=1, description="Lesson title")
    reference: Optional[str] = Field(default=None, description="Reading or scripture reference")
    url: Optional[str] = Field(default=None, description="Link to lesson material")

    def __str__(self) -> str:
        if self.reference:
            return f"{self.title} ({self.reference})"
        return self.title


class FlexNote(BaseModel):
    """Placeholder lesson for a flex day; carries only the day's note."""
    model_config = ConfigDict(extra="forbid")

    notes: Optional[str] = Field(default=None, description="Free-text note for the day")

    def __str__(self) -> str:
        return self.notes or "Flex day"


class ContentCatalog(BaseModel):
    """Ordered, version-tagged lesson sequence."""
    model_config = ConfigDict(extra="forbid")

    version: str = Field(min_length=1, description="Catalog version tag")
    lessons: list[LessonItem] = Field(default_factory=list, description="Lessons in teaching order")

    def __len__(self) -> int:
        return len(self.lessons)


class Devotional(BaseModel):
    """A devotional duty paired with the participant performing it."""
    model_config = ConfigDict(extra="forbid")

    duty: str = Field(description="Duty label (e.g., 'Opening Prayer')")
    participant: str = Field(description="Participant name")

    def __str__(self) -> str:
        return f"{self.duty}: {self.participant}"


# =============================================================================
# Event Models
# =============================================================================

class Event(BaseModel):
    """
    One calendar date in the class schedule.

    Unknown columns from the source table are kept as extra fields and
    carried through to the materialized schedule untouched.
    """
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    date: dt.date = Field(description="Calendar day of the event")
    type: Optional[EventType] = Field(default=None, description="Event type; None when missing")
    substitute: Optional[str] = Field(default=None, description="Teacher standing in for this event")
    teacher_swap: bool = Field(default=False, alias="teacherSwap", description="Force an extra teacher rotation")
    lesson_count: int = Field(default=1, alias="lessonCount", description="Lessons covered (class only)")
    notes: Optional[str] = Field(default=None, description="Free-text note")

    @field_validator("type", mode="before")
    @classmethod
    def normalize_type(cls, value: Any) -> Any:
        """Map blank to None and unknown strings to OTHER."""
        if value is None or isinstance(value, EventType):
            return value
        if isinstance(value, str):
            text = value.strip().lower()
            if not text:
                return None
            try:
                return EventType(text)
            except ValueError:
                logger.warning("Unknown event type %r treated as 'other'", value)
                return EventType.OTHER
        return value

    @field_validator("substitute", "notes", mode="before")
    @classmethod
    def blank_strings(cls, value: Any) -> Any:
        value = _blank_to_none(value)
        return value.strip() if isinstance(value, str) else value

    @field_validator("teacher_swap", mode="before")
    @classmethod
    def swap_default(cls, value: Any) -> Any:
        return False if value is None else value

    @field_validator("lesson_count", mode="before")
    @classmethod
    def lesson_count_default(cls, value: Any) -> Any:
        return 1 if _blank_to_none(value) is None else value

    @model_validator(mode="after")
    def check_lesson_count(self) -> "Event":
        """Class events need a positive count; other types ignore it."""
        if self.lesson_count >= 1:
            return self
        if self.type is EventType.CLASS:
            raise ValueError(f"lessonCount must be at least 1 for class events, got {self.lesson_count}")
        self.lesson_count = 1
        return self

    @property
    def is_duty_bearing(self) -> bool:
        return is_duty_bearing(self.type)

    @property
    def effective_lesson_count(self) -> int:
        """Lesson slots requested; zero for anything but class events."""
        if self.type is not None and self.type.consumes_lessons:
            return self.lesson_count
        return 0

    @property
    def week_key(self) -> tuple[int, int]:
        """ISO (year, week) of the event date."""
        iso = self.date.isocalendar()
        return (iso[0], iso[1])

    def __str__(self) -> str:
        kind = self.type.value if self.type else "untyped"
        return f"{format_date(self.date)} ({kind})"


class MaterializedEvent(Event):
    """An event enriched with its resolved teacher, devotional and lessons."""

    teacher: Optional[str] = Field(default=None, description="Resolved teacher")
    devotional: Optional[Devotional] = Field(default=None, description="Resolved devotional assignment")
    lessons: list[Union[LessonItem, FlexNote]] = Field(default_factory=list, description="Lessons for the day")
    day_name: Optional[str] = Field(default=None, alias="dayName", description="Relative-day label")

    @property
    def is_short(self) -> bool:
        """True for class events that received fewer lessons than requested."""
        return len(self.lessons) < self.effective_lesson_count


# =============================================================================
# Configuration and Input Models
# =============================================================================

class ScheduleConfig(BaseModel):
    """Per-class configuration settings."""
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    class_name: Optional[str] = Field(default=None, alias="className", description="Display name of the class")
    duty_labels: list[str] = Field(
        default_factory=lambda: list(DEFAULT_DUTY_LABELS),
        alias="dutyLabels",
        description="Devotional duties cycled across duty-bearing events",
    )

    @field_validator("duty_labels")
    @classmethod
    def strip_labels(cls, value: list[str]) -> list[str]:
        return [label.strip() for label in value if label and label.strip()]


class ScheduleInput(BaseModel):
    """
    Complete schedule input: events plus participant rosters.

    Rosters are plain names; see ``classrota.data.loader.transform_dataset``
    for the projection from source records.
    """
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    config: ScheduleConfig = Field(default_factory=ScheduleConfig, description="Class configuration")
    events: list[Event] = Field(default_factory=list, alias="dates", description="Dated events in schedule order")
    teachers: list[str] = Field(default_factory=list, description="Teacher rotation order")
    students: list[str] = Field(default_factory=list, description="Devotional rotation order")

    @property
    def total_class_lessons(self) -> int:
        """Lesson slots requested across all class events."""
        return sum(e.effective_lesson_count for e in self.events)

    def summary(self) -> dict[str, Any]:
        """Get a summary of the input data."""
        counts: dict[str, int] = {}
        for event in self.events:
            key = event.type.value if event.type else "missing"
            counts[key] = counts.get(key, 0) + 1
        return {
            "class_name": self.config.class_name,
            "events": len(self.events),
            "teachers": len(self.teachers),
            "students": len(self.students),
            "total_class_lessons": self.total_class_lessons,
            "by_type": counts,
        }
