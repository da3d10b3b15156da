"""
Output schema for built schedules.

The output document is tagged with ``SCHEDULE_VERSION``. Consumers that
cache it must drop any copy whose tag differs and rebuild; bump the version
whenever the shape or the rotation semantics change.
"""

from __future__ import annotations

import datetime as dt
from typing import Any, Optional

from pydantic import BaseModel, Field

from classrota.data.models import ContentCatalog, MaterializedEvent

SCHEDULE_VERSION = "1.0.0"

NO_CLASSES_FOUND = "No classes found"


# =============================================================================
# Diagnostics
# =============================================================================

class ScheduleInfo(BaseModel):
    """Validation results for a built schedule."""
    total_class_lessons: int = Field(alias="totalClassLessons")
    catalog_size: int = Field(default=0, alias="catalogSize")
    diagnostics: list[str] = Field(default_factory=list)
    teacher_load: dict[str, int] = Field(default_factory=dict, alias="teacherLoad")

    model_config = {"populate_by_name": True}

    @property
    def has_diagnostics(self) -> bool:
        return bool(self.diagnostics)


# =============================================================================
# Next Event
# =============================================================================

class NoUpcomingEvent(BaseModel):
    """Terminal result when every event is in the past."""
    day_name: str = Field(default=NO_CLASSES_FOUND, alias="dayName")
    finished: bool = True

    model_config = {"populate_by_name": True}


# =============================================================================
# Complete Output
# =============================================================================

class ScheduleOutput(BaseModel):
    """Complete, version-tagged output for a built schedule."""
    version: str = SCHEDULE_VERSION
    catalog_version: Optional[str] = Field(default=None, alias="catalogVersion")
    generated_at: dt.datetime = Field(
        default_factory=lambda: dt.datetime.now(dt.timezone.utc),
        alias="generatedAt",
    )
    schedule: list[MaterializedEvent]
    info: ScheduleInfo

    model_config = {"populate_by_name": True}

    @property
    def is_current(self) -> bool:
        """Whether this output was produced by the running engine version."""
        return self.version == SCHEDULE_VERSION

    def to_json(self, indent: int = 2) -> str:
        """Serialize to JSON string."""
        return self.model_dump_json(by_alias=True, indent=indent)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return self.model_dump(by_alias=True, mode="json")


def create_schedule_output(
    schedule: list[MaterializedEvent],
    info: ScheduleInfo,
    catalog: ContentCatalog | None = None,
) -> ScheduleOutput:
    """
    Wrap a built schedule and its diagnostics in a version-tagged document.

    Args:
        schedule: Materialized events
        info: Validation results
        catalog: Catalog the schedule was built from, for its version tag

    Returns:
        ScheduleOutput tagged with the current SCHEDULE_VERSION
    """
    return ScheduleOutput(
        version=SCHEDULE_VERSION,
        catalogVersion=catalog.version if catalog else None,
        schedule=schedule,
        info=info,
    )
