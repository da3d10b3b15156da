"""Sequential lesson assignment over the content catalog."""

from __future__ import annotations

from typing import Sequence, Union

from ..data.models import ContentCatalog, Event, EventType, FlexNote, LessonItem


class SequenceOrderError(RuntimeError):
    """Raised when the sequencer is driven out of ascending index order."""
    pass


class LessonSequencer:
    """
    Cursor over the content catalog, synchronised with an event list.

    ``lessons_for`` must be called once per event position, in strictly
    ascending order. Only class events move the cursor, one step per lesson
    actually pulled.
    """

    def __init__(self, events: Sequence[Event], catalog: Union[ContentCatalog, Sequence[LessonItem]]):
        self.events = events
        self.lessons: Sequence[LessonItem] = (
            catalog.lessons if isinstance(catalog, ContentCatalog) else catalog
        )
        self._cursor = 0
        self._last_index = -1

    @property
    def position(self) -> int:
        """Index of the next catalog item to hand out."""
        return self._cursor

    @property
    def remaining(self) -> int:
        return max(0, len(self.lessons) - self._cursor)

    def lessons_for(self, index: int) -> list[Union[LessonItem, FlexNote]]:
        """
        Lessons for the event at ``index``.

        Returns:
            class: up to ``lesson_count`` catalog items (fewer once the
                catalog runs out)
            flex: a single FlexNote carrying the event's note
            anything else: an empty list

        Raises:
            SequenceOrderError: If ``index`` is not greater than the previous one
            IndexError: If ``index`` is outside the event list
        """
        if index <= self._last_index:
            raise SequenceOrderError(
                f"lessons_for({index}) called after lessons_for({self._last_index}); "
                f"indices must be strictly ascending"
            )
        self._last_index = index

        event = self.events[index]

        if event.type is EventType.CLASS:
            pulled: list[Union[LessonItem, FlexNote]] = []
            for _ in range(event.lesson_count):
                if self._cursor >= len(self.lessons):
                    break
                pulled.append(self.lessons[self._cursor])
                self._cursor += 1
            return pulled

        if event.type is EventType.FLEX:
            return [FlexNote(notes=event.notes)]

        return []
