"""Build-and-validate pipeline entry points."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

from .data.loader import load_catalog, load_dataset
from .data.models import ContentCatalog, ScheduleInput
from .engine.builder import build_schedule
from .output.cache import ScheduleCache
from .output.schema import ScheduleOutput, create_schedule_output
from .output.validator import validate_schedule

logger = logging.getLogger(__name__)


def build_output(schedule_input: ScheduleInput, catalog: ContentCatalog) -> ScheduleOutput:
    """
    Build the schedule for ``schedule_input`` and validate it.

    The rosters in ``schedule_input`` are copied into a fresh engine, so
    the same input can be built any number of times.
    """
    schedule = build_schedule(
        schedule_input.events,
        schedule_input.teachers,
        schedule_input.students,
        catalog,
        schedule_input.config,
    )
    info = validate_schedule(schedule_input.events, catalog, schedule)
    return create_schedule_output(schedule, info, catalog)


def run_schedule(
    data_path: Union[str, Path],
    catalog_path: Union[str, Path],
    output_path: Optional[Union[str, Path]] = None,
    cache: Optional[ScheduleCache] = None,
    base_name: Optional[str] = None,
) -> ScheduleOutput:
    """
    Load, build, validate and optionally persist a schedule.

    Args:
        data_path: Path to the dataset JSON export
        catalog_path: Path to the content catalog JSON
        output_path: Optional path to write the output JSON
        cache: Optional cache to refresh
        base_name: Cache key; defaults to the dataset file stem

    Returns:
        The freshly built ScheduleOutput
    """
    schedule_input = load_dataset(data_path)
    catalog = load_catalog(catalog_path)

    output = build_output(schedule_input, catalog)

    if output_path:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(output.to_json())
        logger.info("Schedule written to %s", output_path)

    if cache is not None:
        cache.save(base_name or Path(data_path).stem, output)

    return output


def load_or_build(
    cache: ScheduleCache,
    base_name: str,
    data_path: Union[str, Path],
    catalog_path: Union[str, Path],
) -> ScheduleOutput:
    """Cached output when current, otherwise a fresh build that refreshes the cache."""
    cached = cache.load(base_name)
    if cached is not None:
        return cached
    return run_schedule(data_path, catalog_path, cache=cache, base_name=base_name)
