"""Tests for Pydantic models."""

from __future__ import annotations

from datetime import date

import pytest
from pydantic import ValidationError

from classrota.data.models import (
    DEFAULT_DUTY_LABELS,
    ContentCatalog,
    Devotional,
    Event,
    EventType,
    FlexNote,
    LessonItem,
    MaterializedEvent,
    ScheduleConfig,
    ScheduleInput,
    format_date,
    is_duty_bearing,
)


class TestEventType:
    """Tests for event type classification."""

    def test_duty_bearing_types(self):
        """Class and other events carry a teacher and devotional."""
        assert EventType.CLASS.is_duty_bearing
        assert EventType.OTHER.is_duty_bearing

    def test_non_duty_types(self):
        """Flex, holiday and cancelled events carry no duties."""
        assert not EventType.FLEX.is_duty_bearing
        assert not EventType.HOLIDAY.is_duty_bearing
        assert not EventType.CANCELLED.is_duty_bearing

    def test_missing_type_is_not_duty_bearing(self):
        """A missing type is never duty-bearing."""
        assert is_duty_bearing(None) is False

    def test_only_class_consumes_lessons(self):
        """Only class events draw from the catalog."""
        assert [t for t in EventType if t.consumes_lessons] == [EventType.CLASS]


class TestFormatDate:

    def test_no_zero_padding(self):
        """Dates render as M/D/YYYY without padding."""
        assert format_date(date(2024, 9, 3)) == "9/3/2024"
        assert format_date(date(2024, 12, 25)) == "12/25/2024"


class TestEvent:
    """Tests for Event model."""

    def test_minimal_event(self):
        """An event with just a date and type gets defaults for the rest."""
        event = Event(date="2024-09-03", type="class")
        assert event.date == date(2024, 9, 3)
        assert event.type is EventType.CLASS
        assert event.substitute is None
        assert event.teacher_swap is False
        assert event.lesson_count == 1

    def test_type_is_normalized(self):
        """Type strings are trimmed and lower-cased."""
        assert Event(date="2024-09-03", type=" Class ").type is EventType.CLASS
        assert Event(date="2024-09-03", type="HOLIDAY").type is EventType.HOLIDAY

    def test_blank_type_is_missing(self):
        """Blank or absent types become None."""
        assert Event(date="2024-09-03", type="").type is None
        assert Event(date="2024-09-03").type is None

    def test_unknown_type_becomes_other(self):
        """Unrecognised type strings are treated as other."""
        assert Event(date="2024-09-03", type="fireside").type is EventType.OTHER

    def test_source_column_names(self):
        """Snake case and camel case column names are both accepted."""
        event = Event.model_validate({
            "date": "2024-09-03",
            "type": "class",
            "teacher_swap": True,
            "lessonCount": 2,
        })
        assert event.teacher_swap is True
        assert event.lesson_count == 2

    def test_camel_case_swap(self):
        """The teacherSwap column populates teacher_swap."""
        event = Event.model_validate({"date": "2024-09-03", "teacherSwap": True})
        assert event.teacher_swap is True

    def test_nulls_take_defaults(self):
        """Null cells fall back to field defaults."""
        event = Event.model_validate({
            "date": "2024-09-03",
            "type": "class",
            "teacher_swap": None,
            "lessonCount": None,
            "substitute": "  ",
        })
        assert event.teacher_swap is False
        assert event.lesson_count == 1
        assert event.substitute is None

    def test_lesson_count_must_be_positive(self):
        """Class events need at least one lesson."""
        with pytest.raises(ValidationError):
            Event(date="2024-09-03", type="class", lesson_count=0)

    def test_lesson_count_ignored_outside_class(self):
        """Non-class rows with a zero lesson count fall back to the default."""
        event = Event.model_validate({"date": "2024-09-10", "type": "holiday", "lessonCount": 0})
        assert event.lesson_count == 1
        assert event.effective_lesson_count == 0

    def test_invalid_date(self):
        """Unparseable dates are rejected."""
        with pytest.raises(ValidationError):
            Event(date="not a date", type="class")

    def test_extra_fields_preserved(self):
        """Unknown columns survive a dump."""
        event = Event.model_validate({"date": "2024-09-03", "type": "class", "room": "Chapel"})
        assert event.model_dump()["room"] == "Chapel"

    def test_effective_lesson_count(self):
        """Only class events request lesson slots."""
        assert Event(date="2024-09-03", type="class", lesson_count=2).effective_lesson_count == 2
        assert Event(date="2024-09-03", type="flex", lesson_count=2).effective_lesson_count == 0
        assert Event(date="2024-09-03", lesson_count=2).effective_lesson_count == 0

    def test_week_key_uses_iso_calendar(self):
        """Week keys follow ISO weeks, including at year end."""
        # Sunday belongs to the ISO week that started the previous Monday
        assert Event(date="2024-09-08").week_key == Event(date="2024-09-02").week_key
        assert Event(date="2024-09-09").week_key != Event(date="2024-09-08").week_key
        # 30 Dec 2024 is in ISO week 1 of 2025
        assert Event(date="2024-12-30").week_key == (2025, 1)


class TestMaterializedEvent:

    def test_lessons_union_parses_both_shapes(self):
        """Lesson entries parse as items or flex notes by shape."""
        event = MaterializedEvent.model_validate({
            "date": "2024-09-03",
            "type": "class",
            "lessons": [{"title": "Lesson 1"}, {"notes": "Review"}],
        })
        assert isinstance(event.lessons[0], LessonItem)
        assert isinstance(event.lessons[1], FlexNote)

    def test_is_short(self):
        """A class event with fewer lessons than requested is short."""
        event = MaterializedEvent(
            date=date(2024, 9, 3), type=EventType.CLASS, lesson_count=2,
            lessons=[LessonItem(title="Lesson 1")],
        )
        assert event.is_short

    def test_dump_uses_aliases(self):
        """JSON dumps use camel case aliases and ISO dates."""
        event = MaterializedEvent(date=date(2024, 9, 3), type=EventType.CLASS, day_name="Today")
        data = event.model_dump(by_alias=True, mode="json")
        assert data["dayName"] == "Today"
        assert data["lessonCount"] == 1
        assert data["date"] == "2024-09-03"


class TestContent:

    def test_catalog_length(self):
        """len() of a catalog is its lesson count."""
        catalog = ContentCatalog(version="v1", lessons=[LessonItem(title="A"), LessonItem(title="B")])
        assert len(catalog) == 2

    def test_catalog_requires_version(self):
        """A catalog without a version is rejected."""
        with pytest.raises(ValidationError):
            ContentCatalog(version="", lessons=[])

    def test_lesson_str(self):
        """Lessons render with their reference when present."""
        assert str(LessonItem(title="Faith", reference="Alma 32")) == "Faith (Alma 32)"
        assert str(LessonItem(title="Faith")) == "Faith"

    def test_flex_note_rejects_lesson_fields(self):
        """Flex notes accept only notes."""
        with pytest.raises(ValidationError):
            FlexNote(notes="x", title="y")

    def test_devotional_str(self):
        """Devotionals render as duty and participant."""
        assert str(Devotional(duty="Opening Prayer", participant="Ann")) == "Opening Prayer: Ann"


class TestScheduleConfig:

    def test_default_duty_labels(self):
        """Config without labels uses the default duties."""
        assert ScheduleConfig().duty_labels == DEFAULT_DUTY_LABELS

    def test_blank_labels_dropped(self):
        """Blank duty labels are removed and the rest trimmed."""
        config = ScheduleConfig(duty_labels=["Prayer", " ", "Thought "])
        assert config.duty_labels == ["Prayer", "Thought"]

    def test_alias(self):
        """Config accepts camel case keys."""
        config = ScheduleConfig.model_validate({"className": "Early Morning", "dutyLabels": ["Hymn"]})
        assert config.class_name == "Early Morning"
        assert config.duty_labels == ["Hymn"]


class TestScheduleInput:

    def test_dates_alias(self):
        """The dates table populates events."""
        data = ScheduleInput.model_validate({
            "dates": [{"date": "2024-09-03", "type": "class", "lessonCount": 2}],
            "teachers": ["Ann"],
            "students": ["Ben"],
        })
        assert len(data.events) == 1
        assert data.total_class_lessons == 2

    def test_summary_counts_types(self):
        """The summary counts events per type, with missing types grouped."""
        data = ScheduleInput(
            events=[
                Event(date="2024-09-03", type="class"),
                Event(date="2024-09-05", type="flex"),
                Event(date="2024-09-10"),
            ],
            teachers=["Ann"],
        )
        summary = data.summary()
        assert summary["events"] == 3
        assert summary["by_type"] == {"class": 1, "flex": 1, "missing": 1}
