"""
Roadmap model definitions.

A roadmap is a named, independently time-scaled collection of tasks.
Time groups and stats are derived views and are never persisted.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from roadmap_tracker.models.enums import TimeScale
from roadmap_tracker.models.task import Task


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RoadmapCreate(_CamelModel):
    """Schema for creating a new roadmap."""

    name: str = Field(..., min_length=1, max_length=200)
    time_scale: TimeScale = Field(TimeScale.WEEKLY)


class RoadmapUpdate(_CamelModel):
    """Schema for updating an existing roadmap."""

    name: Optional[str] = Field(None, min_length=1, max_length=200)
    time_scale: Optional[TimeScale] = None


class Roadmap(_CamelModel):
    """Complete roadmap model, as persisted in the document."""

    model_config = ConfigDict(extra="allow")

    id: str
    name: str
    tasks: list[Task] = Field(default_factory=list)
    time_scale: TimeScale = Field(TimeScale.WEEKLY)

    def find_task(self, task_id: str) -> Optional[Task]:
        return next((task for task in self.tasks if task.id == task_id), None)

    def sort_tasks(self) -> None:
        """Order tasks by start date. The sort is stable, so ties keep insertion order."""
        self.tasks.sort(key=lambda task: task.start_date)


class TimeGroup(_CamelModel):
    """
    A calendar-aligned bucket (day, ISO week or month).

    ``end_date`` is the last instant of the bucket's final day.
    """

    key: str = Field(..., description="e.g. 2024-07-15, 2024-W29, 2024-07")
    label: str = Field(..., description="Human readable label")
    start_date: datetime
    end_date: datetime


class TimeGroupWithTasks(TimeGroup):
    """Time group together with the tasks overlapping it."""

    tasks: list[Task] = Field(default_factory=list)


class RoadmapTaskStats(_CamelModel):
    """Completion statistics for one roadmap."""

    total_tasks: int = 0
    completed_tasks: int = 0
    completed_percentage: int = 0
    in_progress_tasks: int = 0
    in_progress_percentage: int = 0
    overdue_tasks: int = 0
    overdue_percentage: int = 0


class RoadmapSummary(_CamelModel):
    """Roadmap list entry."""

    id: str
    name: str
    time_scale: TimeScale
    stats: RoadmapTaskStats
