"""
Consistency checks for a built schedule.

Scheduling data is curated by hand and is often slightly off. Nothing here
raises: every problem becomes a human-readable diagnostic string on the
returned ScheduleInfo, and the schedule is used as built.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from classrota.data.models import (
    ContentCatalog,
    Event,
    MaterializedEvent,
    format_date,
)
from .schema import ScheduleInfo

logger = logging.getLogger(__name__)


def count_class_lessons(events: Sequence[Event]) -> int:
    """Sum of lesson slots requested by class events."""
    return sum(e.effective_lesson_count for e in events)


def check_lesson_total(total_class_lessons: int, catalog_size: int) -> Optional[str]:
    """Compare requested lesson slots with the catalog size."""
    if total_class_lessons > catalog_size:
        return (
            f"You have {total_class_lessons} classes but there are only {catalog_size} "
            f"lessons this year. Consider changing class days to flex days."
        )
    if total_class_lessons < catalog_size:
        return (
            f"You have {total_class_lessons} classes but there are {catalog_size} "
            f"lessons this year. Consider changing flex days to class days or "
            f"covering two lessons on the same day."
        )
    return None


def check_missing_types(events: Sequence[Event]) -> Optional[str]:
    """List dated events that have no type."""
    missing = [format_date(e.date) for e in events if e.type is None and e.date]
    if not missing:
        return None
    return (
        f"The following dates are missing a corresponding type: {', '.join(missing)}. "
        f"Set the correct type (i.e. class, flex, etc.) or delete the date."
    )


def calculate_teacher_load(schedule: Sequence[MaterializedEvent]) -> dict[str, int]:
    """Number of events each teacher was assigned, in first-seen order."""
    load: dict[str, int] = {}
    for event in schedule:
        if not event.teacher:
            continue
        load[event.teacher] = load.get(event.teacher, 0) + 1
    return load


def validate_schedule(
    events: Sequence[Event],
    catalog: ContentCatalog,
    schedule: Sequence[MaterializedEvent],
) -> ScheduleInfo:
    """
    Cross-check raw events, catalog and built schedule.

    Args:
        events: Raw events the schedule was built from
        catalog: Content catalog
        schedule: Materialized schedule

    Returns:
        ScheduleInfo with totals, diagnostics and teacher load
    """
    total_class_lessons = count_class_lessons(events)
    diagnostics: list[str] = []

    for message in (
        check_lesson_total(total_class_lessons, len(catalog)),
        check_missing_types(events),
    ):
        if message:
            logger.warning(message)
            diagnostics.append(message)

    return ScheduleInfo(
        totalClassLessons=total_class_lessons,
        catalogSize=len(catalog),
        diagnostics=diagnostics,
        teacherLoad=calculate_teacher_load(schedule),
    )
