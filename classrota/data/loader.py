"""Load and validate schedule datasets and content catalogs from JSON files."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Union

from pydantic import ValidationError

from .models import ContentCatalog, ScheduleInput

logger = logging.getLogger(__name__)

REQUIRED_TABLES = ["teachers", "students"]


class DataValidationError(Exception):
    """Raised when schedule data fails validation."""
    pass


def transform_dataset(data: dict) -> dict:
    """
    Project raw table records onto the shape ScheduleInput expects.

    - teachers: ``[{"name": ...}]`` -> names, in table order
    - students: ``[{"name": ...}]`` -> names, blank names dropped
    - dates/events: rows without a date are dropped

    Args:
        data: Raw dataset dictionary with one key per exported table

    Returns:
        New dictionary ready for ``ScheduleInput.model_validate``

    Raises:
        DataValidationError: If a required table is missing or malformed
    """
    errors = []

    for table in REQUIRED_TABLES:
        if table not in data:
            errors.append(f"Missing required table: {table}")
    if "dates" not in data and "events" not in data:
        errors.append("Missing required table: dates")

    if errors:
        raise DataValidationError("; ".join(errors))

    for table in REQUIRED_TABLES:
        if not isinstance(data[table], list):
            errors.append(f"Table '{table}' must be a list")
    rows = data.get("dates", data.get("events"))
    if rows is None:
        rows = []
    elif not isinstance(rows, list):
        errors.append("Table 'dates' must be a list")

    if errors:
        raise DataValidationError("; ".join(errors))

    teachers = []
    for i, record in enumerate(data["teachers"]):
        name = _record_name(record)
        if not name:
            errors.append(f"Teacher {i} missing 'name'")
            continue
        teachers.append(name)

    events = []
    for i, row in enumerate(rows):
        if not isinstance(row, dict):
            errors.append(f"Date row {i} must be an object, got {type(row).__name__}")
            continue
        if not row.get("date"):
            logger.warning("Dropping schedule row without a date: %r", row)
            continue
        events.append(row)

    if errors:
        raise DataValidationError("; ".join(errors))

    students = [name for name in (_record_name(r) for r in data["students"]) if name]

    result: dict[str, Any] = {
        "events": events,
        "teachers": teachers,
        "students": students,
    }
    if data.get("config"):
        result["config"] = data["config"]
    return result


def _record_name(record: Any) -> str:
    if isinstance(record, str):
        return record.strip()
    if isinstance(record, dict):
        name = record.get("name")
        return name.strip() if isinstance(name, str) else ""
    return ""


def parse_dataset(data: dict) -> ScheduleInput:
    """
    Transform and validate a raw dataset dictionary.

    Raises:
        DataValidationError: If the data fails transformation or validation
    """
    transformed = transform_dataset(data)
    try:
        return ScheduleInput.model_validate(transformed)
    except ValidationError as e:
        raise DataValidationError(str(e)) from e


def load_dataset(path: Union[str, Path]) -> ScheduleInput:
    """
    Load schedule data from a JSON export.

    Args:
        path: Path to the JSON file

    Returns:
        Validated ScheduleInput

    Raises:
        FileNotFoundError: If the file doesn't exist
        json.JSONDecodeError: If the file isn't valid JSON
        DataValidationError: If the data fails validation
    """
    path = Path(path)

    with open(path) as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise DataValidationError("Dataset must be a JSON object keyed by table name")

    schedule_input = parse_dataset(data)
    logger.info(
        "Loaded %d events, %d teachers, %d students from %s",
        len(schedule_input.events), len(schedule_input.teachers), len(schedule_input.students), path,
    )
    return schedule_input


def load_catalog(path: Union[str, Path]) -> ContentCatalog:
    """
    Load a version-tagged content catalog.

    The file holds ``{"version": "...", "lessons": [{"title": ...}, ...]}``.

    Raises:
        FileNotFoundError: If the file doesn't exist
        json.JSONDecodeError: If the file isn't valid JSON
        DataValidationError: If the catalog fails validation
    """
    path = Path(path)

    with open(path) as f:
        data = json.load(f)

    try:
        catalog = ContentCatalog.model_validate(data)
    except ValidationError as e:
        raise DataValidationError(str(e)) from e

    logger.info("Loaded catalog %s with %d lessons from %s", catalog.version, len(catalog), path)
    return catalog
