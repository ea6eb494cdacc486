"""
The persisted document holding every roadmap.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from roadmap_tracker.models.pomodoro import ActivePomodoroTaskDetails, PomodoroSession
from roadmap_tracker.models.roadmap import Roadmap


class AllRoadmapsData(BaseModel):
    """Current (multi-roadmap) schema of the stored document."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    roadmaps: list[Roadmap] = Field(default_factory=list)
    pomodoro_sessions: list[PomodoroSession] = Field(default_factory=list)
    active_pomodoro_task_details: Optional[ActivePomodoroTaskDetails] = None

    @classmethod
    def empty(cls) -> "AllRoadmapsData":
        return cls()

    def find_roadmap(self, roadmap_id: str) -> Optional[Roadmap]:
        return next((r for r in self.roadmaps if r.id == roadmap_id), None)

    def clear_pomodoro_reference(self, roadmap_id: str, task_id: Optional[str] = None) -> bool:
        """Drop the active Pomodoro reference if it points at the deleted item."""
        details = self.active_pomodoro_task_details
        if details is not None and details.references(roadmap_id, task_id):
            self.active_pomodoro_task_details = None
            return True
        return False

    def to_json_dict(self) -> dict[str, Any]:
        """
        Serialize to the stored JSON shape.

        Empty categories are omitted; ``activePomodoroTaskDetails`` is
        always written (``null`` when no task is selected). Unknown fields
        carried by stored tasks and roadmaps are written back unchanged.
        """
        data = self.model_dump(mode="json", by_alias=True)
        for roadmap in data["roadmaps"]:
            for task in roadmap["tasks"]:
                _drop_none(task, "category")
        for session in data["pomodoroSessions"]:
            _drop_none(session, "taskCategory")
        if data["activePomodoroTaskDetails"] is not None:
            _drop_none(data["activePomodoroTaskDetails"], "taskCategory")
        return data


def _drop_none(data: dict[str, Any], key: str) -> None:
    if data.get(key) is None:
        data.pop(key, None)
