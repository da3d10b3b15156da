"""File-backed cache for built schedules, keyed by class name."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError

from .schema import SCHEDULE_VERSION, ScheduleOutput

logger = logging.getLogger(__name__)

CACHE_PREFIX = "schedule_data_"


class ScheduleCache:
    """
    Stores one ScheduleOutput per base name as JSON.

    Entries written by a different SCHEDULE_VERSION are treated as missing
    so the caller rebuilds.
    """

    def __init__(self, directory: Union[str, Path]):
        self.directory = Path(directory)

    def path_for(self, base_name: str) -> Path:
        return self.directory / f"{CACHE_PREFIX}{base_name}.json"

    def load(self, base_name: str) -> Optional[ScheduleOutput]:
        """Cached output for ``base_name``, or None if missing, unreadable or stale."""
        path = self.path_for(base_name)
        if not path.exists():
            return None

        try:
            with open(path) as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.debug("Ignoring unreadable cache file %s: %s", path, e)
            return None

        if not isinstance(data, dict) or data.get("version") != SCHEDULE_VERSION:
            logger.debug("Discarding stale cache file %s", path)
            return None

        try:
            return ScheduleOutput.model_validate(data)
        except ValidationError as e:
            logger.debug("Ignoring invalid cache file %s: %s", path, e)
            return None

    def save(self, base_name: str, output: ScheduleOutput) -> Path:
        """Write ``output`` for ``base_name`` and return the file path."""
        path = self.path_for(base_name)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(output.to_json())
        logger.debug("Cached schedule at %s", path)
        return path

    def clear(self, base_name: str) -> None:
        self.path_for(base_name).unlink(missing_ok=True)
