"""
Task model definitions.

Tasks are date-ranged items owned by a roadmap. Stored tasks are loaded
leniently (unknown fields are kept as-is); the date-range check only runs
when a task is created or imported.
"""

from datetime import date
from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class TaskBase(BaseModel):
    """Base task fields shared across create/read."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str = Field(..., description="Task name")
    start_date: date = Field(..., description="First day of the task (inclusive)")
    end_date: date = Field(..., description="Last day of the task (inclusive)")
    category: Optional[str] = Field(None, description="Free-text category label")


class TaskCreate(TaskBase):
    """Schema for adding or importing a task. Imported tasks may carry their own id."""

    id: Optional[str] = Field(None, min_length=1)
    name: str = Field(..., min_length=1, max_length=500)
    notes: str = Field("", description="Rich-text notes (HTML)")
    completed: bool = False

    @model_validator(mode="after")
    def validate_date_range(self):
        """Reject tasks that end before they start."""
        if self.start_date > self.end_date:
            raise ValueError(
                f"startDate ({self.start_date}) must not be after endDate ({self.end_date})"
            )
        return self

    def to_task(self) -> "Task":
        """Build a stored task, generating an id unless one was supplied."""
        return Task(
            id=self.id or str(uuid4()),
            name=self.name,
            start_date=self.start_date,
            end_date=self.end_date,
            completed=self.completed,
            notes=self.notes,
            category=self.category,
        )


class TaskUpdate(BaseModel):
    """Schema for updating a task in place."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    completed: Optional[bool] = None
    notes: Optional[str] = None


class Task(TaskBase):
    """Complete task model, as persisted in the document."""

    model_config = ConfigDict(extra="allow")

    id: str
    completed: bool = False
    notes: str = ""
