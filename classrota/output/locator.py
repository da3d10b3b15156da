"""Find the next upcoming event in a built schedule."""

from __future__ import annotations

import datetime as dt
from typing import Optional, Union

from classrota.data.models import MaterializedEvent
from .schema import NO_CLASSES_FOUND, NoUpcomingEvent


def relative_day_name(event_date: dt.date, today: dt.date) -> str:
    """Label an event date relative to ``today``."""
    diff = (event_date - today).days
    if diff < 0:
        return NO_CLASSES_FOUND
    if diff == 0:
        return "Today"
    if diff == 1:
        return "Tomorrow"
    return f"Next class in {diff} days"


def find_next_event(
    schedule: list[MaterializedEvent],
    today: Optional[dt.date] = None,
) -> Union[MaterializedEvent, NoUpcomingEvent]:
    """
    Earliest event dated today or later, labelled with a relative day name.

    Note: ``schedule`` is sorted by date in place (stable). Copy it first if
    the original order matters.

    Args:
        schedule: Materialized schedule
        today: Reference day, defaults to ``date.today()``

    Returns:
        A copy of the next event with ``day_name`` set, or NoUpcomingEvent
    """
    today = today or dt.date.today()
    schedule.sort(key=lambda e: e.date)

    for event in schedule:
        if event.date >= today:
            return event.model_copy(update={"day_name": relative_day_name(event.date, today)})

    return NoUpcomingEvent()
