"""
Round-robin rotation pools for teachers and devotional duties.

All pools own a private copy of their participants; the caller's lists are
never mutated. Rotation only happens when a caller asks for it, so the order
in which events are fed in is what defines the result.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Iterable, Optional, Sequence

from ..data.models import Devotional, Event

logger = logging.getLogger(__name__)


class RotationPool:
    """
    Ordered participant list where serving moves the server to the back.

    Example:
        >>> pool = RotationPool(["Ann", "Ben", "Cal"])
        >>> pool.current
        'Ann'
        >>> pool.advance()
        >>> pool.members
        ('Ben', 'Cal', 'Ann')
    """

    def __init__(self, participants: Iterable[str]):
        self._members: deque[str] = deque(participants)

    @property
    def current(self) -> Optional[str]:
        """Head of the pool, or None when empty."""
        return self._members[0] if self._members else None

    @property
    def members(self) -> tuple[str, ...]:
        return tuple(self._members)

    def advance(self) -> None:
        """Move the head to the back. No-op for pools of 0 or 1."""
        if len(self._members) > 1:
            self._members.rotate(-1)

    def __len__(self) -> int:
        return len(self._members)

    def __repr__(self) -> str:
        return f"RotationPool({list(self._members)!r})"


class TeacherRotation:
    """
    Weekly teacher rotation.

    The pool advances once per new ISO week containing a duty-bearing event.
    The first such week is recorded without advancing so the first teacher
    in the list serves first. A ``teacher_swap`` flag adds one extra advance
    on top of the weekly one. Substitutes are returned in place of the pool
    head without touching the pool.
    """

    def __init__(self, teachers: Iterable[str]):
        self.pool = RotationPool(teachers)
        self._seen_weeks: set[tuple[int, int]] = set()

    @property
    def weeks_seen(self) -> int:
        return len(self._seen_weeks)

    def resolve(self, event: Event) -> Optional[str]:
        """Resolve the teacher for ``event``, rotating as needed."""
        if not event.is_duty_bearing:
            return None

        week = event.week_key
        if week not in self._seen_weeks:
            first_week = not self._seen_weeks
            self._seen_weeks.add(week)
            if not first_week:
                self.pool.advance()

        if event.teacher_swap:
            logger.debug("Teacher swap on %s", event.date)
            self.pool.advance()

        if event.substitute:
            return event.substitute
        return self.pool.current


class AssignmentRotation:
    """
    Devotional duty rotation.

    Each duty-bearing event takes the next label from ``duty_labels``
    (wrapping) and the current head of the participant pool, then both
    advance by one. The label list is short and the roster long, so the two
    cycles drift against each other and every participant eventually gets
    every duty.
    """

    def __init__(self, duty_labels: Sequence[str], participants: Iterable[str]):
        self.duty_labels = tuple(duty_labels)
        self.pool = RotationPool(participants)
        self._label_index = 0

    def next_assignment(self, event: Event) -> Optional[Devotional]:
        """Produce the next assignment, or None for non-duty events."""
        if not event.is_duty_bearing:
            return None

        participant = self.pool.current
        if participant is None or not self.duty_labels:
            return None

        duty = self.duty_labels[self._label_index % len(self.duty_labels)]
        self._label_index += 1
        self.pool.advance()
        return Devotional(duty=duty, participant=participant)
