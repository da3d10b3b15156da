"""
Sample data generator for the class rotation engine.

Generates a term of dated events with rosters and a matching content
catalog, for demos and tests.

Usage:
    from classrota.data.generator import generate_sample_term, generate_small_term

    # Generate with custom config
    schedule_input, catalog = generate_sample_term(GeneratorConfig(weeks=30))

    # Quick test data
    schedule_input, catalog = generate_small_term()
"""

from __future__ import annotations

import datetime as dt
import json
import random
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .models import (
    ContentCatalog,
    Event,
    EventType,
    LessonItem,
    ScheduleConfig,
    ScheduleInput,
)


# =============================================================================
# Name Data
# =============================================================================

FIRST_NAMES = [
    "James", "John", "Robert", "Michael", "David", "William", "Richard", "Joseph",
    "Thomas", "Sarah", "Jessica", "Emily", "Ashley", "Amanda", "Elizabeth",
    "Rachel", "Laura", "Emma", "Olivia", "Sophia", "Isabella", "Charlotte",
    "Daniel", "Matthew", "Andrew", "Samuel", "Henry", "Grace", "Hannah", "Abigail",
]

LAST_NAMES = [
    "Smith", "Johnson", "Williams", "Brown", "Jones", "Garcia", "Miller", "Davis",
    "Wilson", "Anderson", "Taylor", "Moore", "Jackson", "Martin", "Lee", "Thompson",
    "White", "Harris", "Clark", "Lewis", "Robinson", "Walker", "Young", "Allen",
]

FLEX_NOTES = [
    "Review game",
    "Service project",
    "Guest speaker",
    "Catch-up day",
    "Class party",
]


# =============================================================================
# Generator Configuration
# =============================================================================

@dataclass
class GeneratorConfig:
    """Configuration for term generation.

    With ``catalog_matches_classes`` set, the catalog holds exactly as many
    lessons as the generated class events request, so the validator reports
    no lesson-count diagnostic.
    """
    start_date: dt.date = field(default_factory=lambda: dt.date(2024, 8, 19))
    weeks: int = 36
    meeting_weekdays: list[int] = field(default_factory=lambda: [0, 1, 2, 3, 4])  # Mon-Fri

    num_teachers: int = 3
    num_students: int = 20

    holiday_probability: float = 0.05
    flex_probability: float = 0.1
    double_lesson_probability: float = 0.0
    swap_probability: float = 0.0

    catalog_matches_classes: bool = True
    catalog_version: str = "sample-1"

    seed: Optional[int] = None


# =============================================================================
# Generator Functions
# =============================================================================

def generate_sample_term(
    config: GeneratorConfig | None = None,
) -> tuple[ScheduleInput, ContentCatalog]:
    """
    Generate a term of events, rosters and a content catalog.

    Args:
        config: Generator configuration (uses defaults if None)

    Returns:
        (ScheduleInput, ContentCatalog)
    """
    if config is None:
        config = GeneratorConfig()

    rng = random.Random(config.seed)

    names = _generate_names(rng, config.num_teachers + config.num_students)
    teachers = names[:config.num_teachers]
    students = names[config.num_teachers:]

    events = _generate_events(rng, config)

    class_lessons = sum(e.effective_lesson_count for e in events)
    catalog_size = class_lessons if config.catalog_matches_classes else rng.randint(1, class_lessons + 5)
    catalog = _generate_catalog(catalog_size, config.catalog_version)

    schedule_input = ScheduleInput(
        config=ScheduleConfig(class_name="Generated Test Class"),
        events=events,
        teachers=teachers,
        students=students,
    )
    return schedule_input, catalog


def generate_small_term(seed: int | None = None) -> tuple[ScheduleInput, ContentCatalog]:
    """
    Generate a small term for quick testing.

    - 6 weeks, Tuesday and Thursday meetings
    - 3 teachers, 5 students
    """
    config = GeneratorConfig(
        weeks=6,
        meeting_weekdays=[1, 3],
        num_teachers=3,
        num_students=5,
        holiday_probability=0.1,
        flex_probability=0.1,
        seed=seed,
    )
    return generate_sample_term(config)


def _generate_names(rng: random.Random, count: int) -> list[str]:
    """Unique 'First Last' names."""
    names: list[str] = []
    seen: set[str] = set()
    while len(names) < count:
        name = f"{rng.choice(FIRST_NAMES)} {rng.choice(LAST_NAMES)}"
        if name in seen:
            if len(seen) >= len(FIRST_NAMES) * len(LAST_NAMES):
                name = f"{name} {len(names)}"
            else:
                continue
        seen.add(name)
        names.append(name)
    return names


def _generate_events(rng: random.Random, config: GeneratorConfig) -> list[Event]:
    """Events for every meeting weekday of every week, in date order."""
    # Align to the Monday of the start week
    monday = config.start_date - dt.timedelta(days=config.start_date.weekday())
    weekdays = sorted(set(config.meeting_weekdays))

    events: list[Event] = []
    for week in range(config.weeks):
        for weekday in weekdays:
            day = monday + dt.timedelta(weeks=week, days=weekday)
            if day < config.start_date:
                continue
            events.append(_generate_event(rng, config, day))
    return events


def _generate_event(rng: random.Random, config: GeneratorConfig, day: dt.date) -> Event:
    roll = rng.random()
    if roll < config.holiday_probability:
        return Event(date=day, type=EventType.HOLIDAY)
    if roll < config.holiday_probability + config.flex_probability:
        return Event(date=day, type=EventType.FLEX, notes=rng.choice(FLEX_NOTES))

    lesson_count = 2 if rng.random() < config.double_lesson_probability else 1
    teacher_swap = rng.random() < config.swap_probability
    return Event(date=day, type=EventType.CLASS, lesson_count=lesson_count, teacher_swap=teacher_swap)


def _generate_catalog(size: int, version: str) -> ContentCatalog:
    lessons = [
        LessonItem(title=f"Lesson {i}", reference=f"Section {i}")
        for i in range(1, size + 1)
    ]
    return ContentCatalog(version=version, lessons=lessons)


# =============================================================================
# Export
# =============================================================================

def term_to_dataset(schedule_input: ScheduleInput) -> dict:
    """
    Convert a ScheduleInput back into the exported table layout.

    The result round-trips through ``classrota.data.loader.parse_dataset``.
    """
    return {
        "config": schedule_input.config.model_dump(by_alias=True, exclude_none=True),
        "dates": [
            e.model_dump(by_alias=True, mode="json", exclude_none=True)
            for e in schedule_input.events
        ],
        "teachers": [{"name": name} for name in schedule_input.teachers],
        "students": [{"name": name} for name in schedule_input.students],
    }


def save_generated_term(
    schedule_input: ScheduleInput,
    catalog: ContentCatalog,
    directory: str | Path,
) -> tuple[Path, Path]:
    """
    Write ``dataset.json`` and ``catalog.json`` into ``directory``.

    Returns:
        (dataset_path, catalog_path)
    """
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)

    dataset_path = directory / "dataset.json"
    catalog_path = directory / "catalog.json"

    with open(dataset_path, "w") as f:
        json.dump(term_to_dataset(schedule_input), f, indent=2)
    with open(catalog_path, "w") as f:
        json.dump(catalog.model_dump(mode="json", exclude_none=True), f, indent=2)

    return dataset_path, catalog_path


def get_generation_stats(schedule_input: ScheduleInput, catalog: ContentCatalog) -> dict:
    """Summary statistics for generated data."""
    stats = schedule_input.summary()
    stats["catalog_size"] = len(catalog)
    stats["catalog_version"] = catalog.version
    return stats
