"""Schedule output: schema, validation, next-event lookup and caching."""

from .schema import (
    SCHEDULE_VERSION,
    NO_CLASSES_FOUND,
    ScheduleInfo,
    NoUpcomingEvent,
    ScheduleOutput,
    create_schedule_output,
)
from .validator import (
    validate_schedule,
    count_class_lessons,
    check_lesson_total,
    check_missing_types,
    calculate_teacher_load,
)
from .locator import find_next_event, relative_day_name
from .cache import ScheduleCache

__all__ = [
    # Schema
    "SCHEDULE_VERSION",
    "NO_CLASSES_FOUND",
    "ScheduleInfo",
    "NoUpcomingEvent",
    "ScheduleOutput",
    "create_schedule_output",
    # Validator
    "validate_schedule",
    "count_class_lessons",
    "check_lesson_total",
    "check_missing_types",
    "calculate_teacher_load",
    # Locator
    "find_next_event",
    "relative_day_name",
    # Cache
    "ScheduleCache",
]
