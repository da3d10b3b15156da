"""Rotation and assignment engine."""

from .rotation import RotationPool, TeacherRotation, AssignmentRotation
from .sequencer import LessonSequencer, SequenceOrderError
from .builder import ScheduleEngine, build_schedule

__all__ = [
    "RotationPool",
    "TeacherRotation",
    "AssignmentRotation",
    "LessonSequencer",
    "SequenceOrderError",
    "ScheduleEngine",
    "build_schedule",
]
