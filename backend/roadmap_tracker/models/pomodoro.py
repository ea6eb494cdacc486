"""
Pomodoro model definitions.

Sessions form an append-only log kept in the document. The active task
details are a weak reference (roadmap id + task id) with denormalized
display fields.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from roadmap_tracker.models.enums import SessionType


class ActivePomodoroTaskDetails(BaseModel):
    """Task currently selected for the Pomodoro timer."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    roadmap_id: str
    task_id: str
    task_name: str
    task_category: Optional[str] = None

    def references(self, roadmap_id: str, task_id: Optional[str] = None) -> bool:
        """True if this points at the roadmap (and the task, when given)."""
        if self.roadmap_id != roadmap_id:
            return False
        return task_id is None or self.task_id == task_id


class ActivePomodoroTaskRequest(BaseModel):
    """Select (or clear, with ``task_id`` None) the active Pomodoro task."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    roadmap_id: Optional[str] = None
    task_id: Optional[str] = None


class PomodoroSessionCreate(BaseModel):
    """Schema for logging a finished or interrupted session."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    roadmap_id: str
    task_id: str
    start_time: str = Field(..., description="ISO timestamp")
    end_time: str = Field(..., description="ISO timestamp")
    planned_duration_seconds: int = Field(..., ge=0)
    actual_duration_seconds: int = Field(..., ge=0)
    session_type: SessionType = SessionType.WORK
    completed: bool = False


class PomodoroSession(PomodoroSessionCreate):
    """Logged session. Task name and category are denormalized for analytics."""

    model_config = ConfigDict(extra="allow")

    id: str
    task_name: str
    task_category: Optional[str] = None
