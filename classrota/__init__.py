"""Class rotation scheduler - teachers, devotionals and lessons per class date."""

from .engine import ScheduleEngine, build_schedule
from .main import build_output, run_schedule, load_or_build
from .output import SCHEDULE_VERSION, validate_schedule, find_next_event
from .cli import app as cli_app

__all__ = [
    "ScheduleEngine",
    "build_schedule",
    "build_output",
    "run_schedule",
    "load_or_build",
    "SCHEDULE_VERSION",
    "validate_schedule",
    "find_next_event",
    # CLI
    "cli_app",
]
