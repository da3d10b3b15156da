"""
Schedule builder.

Walks the event list once, left to right, and resolves for each event:

1. devotional - AssignmentRotation (skipped for non-duty types)
2. lessons    - LessonSequencer (position indexed)
3. teacher    - TeacherRotation (weekly advance, swap, substitute)

All three carry state across events, so the walk is strictly sequential and
an engine can only be used for one traversal.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

from ..data.models import (
    ContentCatalog,
    Event,
    MaterializedEvent,
    ScheduleConfig,
)
from .rotation import AssignmentRotation, TeacherRotation
from .sequencer import LessonSequencer

logger = logging.getLogger(__name__)


class ScheduleEngine:
    """
    Owns the rotation state for a single schedule traversal.

    Example:
        >>> engine = ScheduleEngine(teachers, students, catalog)
        >>> schedule = engine.build(events)
    """

    def __init__(
        self,
        teachers: Iterable[str],
        students: Iterable[str],
        catalog: ContentCatalog,
        config: Optional[ScheduleConfig] = None,
    ):
        self.config = config or ScheduleConfig()
        self.catalog = catalog
        self.teacher_rotation = TeacherRotation(teachers)
        self.assignment_rotation = AssignmentRotation(self.config.duty_labels, students)
        self.sequencer: Optional[LessonSequencer] = None
        self._built = False

    def build(self, events: Sequence[Event]) -> list[MaterializedEvent]:
        """
        Materialize ``events`` into the enriched schedule.

        Raises:
            RuntimeError: If this engine has already built a schedule
        """
        if self._built:
            raise RuntimeError("ScheduleEngine has already built a schedule; create a new engine")
        self._built = True

        self.sequencer = LessonSequencer(events, self.catalog)
        schedule = [self._materialize(i, event) for i, event in enumerate(events)]

        logger.info(
            "Built schedule: %d events, %d weeks, %d of %d catalog lessons used",
            len(schedule),
            self.teacher_rotation.weeks_seen,
            self.sequencer.position,
            len(self.catalog),
        )
        return schedule

    def _materialize(self, index: int, event: Event) -> MaterializedEvent:
        devotional = self.assignment_rotation.next_assignment(event)
        lessons = self.sequencer.lessons_for(index)
        teacher = self.teacher_rotation.resolve(event)

        logger.debug(
            "%s: teacher=%s devotional=%s lessons=%d",
            event, teacher, devotional, len(lessons),
        )

        return MaterializedEvent.model_validate({
            **event.model_dump(),
            "teacher": teacher,
            "devotional": devotional,
            "lessons": lessons,
        })


def build_schedule(
    events: Sequence[Event],
    teachers: Iterable[str],
    students: Iterable[str],
    catalog: ContentCatalog,
    config: Optional[ScheduleConfig] = None,
) -> list[MaterializedEvent]:
    """
    Build a schedule with a fresh engine.

    Args:
        events: Events in schedule order
        teachers: Teacher rotation order
        students: Devotional rotation order
        catalog: Content catalog consumed by class events
        config: Optional class configuration (duty labels)

    Returns:
        One MaterializedEvent per input event, in input order
    """
    engine = ScheduleEngine(teachers, students, catalog, config)
    return engine.build(events)
