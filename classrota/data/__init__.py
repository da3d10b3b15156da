"""Data models, loading utilities and sample data."""

from .models import (
    EventType,
    Event,
    MaterializedEvent,
    LessonItem,
    FlexNote,
    Devotional,
    ContentCatalog,
    ScheduleConfig,
    ScheduleInput,
)
from .loader import (
    DataValidationError,
    load_dataset,
    load_catalog,
    parse_dataset,
    transform_dataset,
)
from .generator import (
    GeneratorConfig,
    generate_sample_term,
    generate_small_term,
    save_generated_term,
    get_generation_stats,
)

__all__ = [
    # Models
    "EventType",
    "Event",
    "MaterializedEvent",
    "LessonItem",
    "FlexNote",
    "Devotional",
    "ContentCatalog",
    "ScheduleConfig",
    "ScheduleInput",
    # Loader
    "DataValidationError",
    "load_dataset",
    "load_catalog",
    "parse_dataset",
    "transform_dataset",
    # Generator
    "GeneratorConfig",
    "generate_sample_term",
    "generate_small_term",
    "save_generated_term",
    "get_generation_stats",
]
