"""
Roadmap service.

Applies user mutations to the coordinator's live document and persists
them. Read-only views (time groups, stats, export) are computed from the
live document on demand.
"""

from __future__ import annotations

import re
from datetime import date
from typing import Any, Optional
from uuid import uuid4

from roadmap_tracker.core.exceptions import NotFoundError, ValidationError
from roadmap_tracker.core.logger import setup_logger
from roadmap_tracker.models.enums import TimeScale
from roadmap_tracker.models.pomodoro import (
    ActivePomodoroTaskDetails,
    PomodoroSession,
    PomodoroSessionCreate,
)
from roadmap_tracker.models.roadmap import (
    Roadmap,
    RoadmapCreate,
    RoadmapSummary,
    RoadmapTaskStats,
    RoadmapUpdate,
    TimeGroupWithTasks,
)
from roadmap_tracker.models.task import Task, TaskCreate, TaskUpdate
from roadmap_tracker.services.calendar_grouping import group_tasks_with_members
from roadmap_tracker.services.roadmap_stats import calculate_stats
from roadmap_tracker.services.storage_coordinator import StorageCoordinator

logger = setup_logger(__name__)


def export_file_name(roadmap: Roadmap) -> str:
    """File name for a roadmap export, e.g. ``my_plan-data.json``."""
    stem = re.sub(r"[^a-z0-9]", "_", roadmap.name, flags=re.IGNORECASE).lower()
    return f"{stem or 'roadmap'}-data.json"


class RoadmapService:
    """Mutations and views over the live document."""

    def __init__(self, coordinator: StorageCoordinator):
        self.coordinator = coordinator

    @property
    def document(self):
        return self.coordinator.document

    def get_roadmap(self, roadmap_id: str) -> Roadmap:
        roadmap = self.document.find_roadmap(roadmap_id)
        if roadmap is None:
            raise NotFoundError(f"Roadmap {roadmap_id} not found")
        return roadmap

    def get_task(self, roadmap_id: str, task_id: str) -> Task:
        task = self.get_roadmap(roadmap_id).find_task(task_id)
        if task is None:
            raise NotFoundError(f"Task {task_id} not found")
        return task

    # ===========================================
    # Views
    # ===========================================

    def list_roadmaps(self, today: Optional[date] = None) -> list[RoadmapSummary]:
        return [
            RoadmapSummary(
                id=roadmap.id,
                name=roadmap.name,
                time_scale=roadmap.time_scale,
                stats=calculate_stats(roadmap, today),
            )
            for roadmap in self.document.roadmaps
        ]

    def get_time_groups(self, roadmap_id: str) -> list[TimeGroupWithTasks]:
        roadmap = self.get_roadmap(roadmap_id)
        return group_tasks_with_members(roadmap.tasks, roadmap.time_scale)

    def get_stats(self, roadmap_id: str, today: Optional[date] = None) -> RoadmapTaskStats:
        return calculate_stats(self.get_roadmap(roadmap_id), today)

    def export_roadmap(self, roadmap_id: str) -> dict[str, Any]:
        """The roadmap in its stored JSON shape."""
        roadmap = self.get_roadmap(roadmap_id)
        data = roadmap.model_dump(mode="json", by_alias=True)
        for task in data["tasks"]:
            if task.get("category") is None:
                task.pop("category", None)
        return data

    # ===========================================
    # Roadmaps
    # ===========================================

    async def create_roadmap(self, data: RoadmapCreate) -> Roadmap:
        self.coordinator.ensure_mutable()
        roadmap = Roadmap(id=str(uuid4()), name=data.name, tasks=[], time_scale=data.time_scale)
        self.document.roadmaps.append(roadmap)
        await self.coordinator.persist()
        return roadmap

    async def update_roadmap(self, roadmap_id: str, update: RoadmapUpdate) -> Roadmap:
        self.coordinator.ensure_mutable()
        roadmap = self.get_roadmap(roadmap_id)
        if update.name is not None:
            roadmap.name = update.name
        if update.time_scale is not None:
            roadmap.time_scale = update.time_scale
        await self.coordinator.persist()
        return roadmap

    async def rename_roadmap(self, roadmap_id: str, name: str) -> Roadmap:
        return await self.update_roadmap(roadmap_id, RoadmapUpdate(name=name))

    async def set_time_scale(self, roadmap_id: str, time_scale: TimeScale) -> Roadmap:
        return await self.update_roadmap(roadmap_id, RoadmapUpdate(time_scale=time_scale))

    async def delete_roadmap(self, roadmap_id: str) -> None:
        self.coordinator.ensure_mutable()
        roadmap = self.get_roadmap(roadmap_id)
        self.document.roadmaps.remove(roadmap)
        if self.document.clear_pomodoro_reference(roadmap_id):
            logger.info("Cleared active Pomodoro task of deleted roadmap %s", roadmap_id)
        await self.coordinator.persist()

    # ===========================================
    # Tasks
    # ===========================================

    async def add_task(self, roadmap_id: str, data: TaskCreate) -> Task:
        tasks = await self.import_tasks(roadmap_id, [data])
        return tasks[0]

    async def import_tasks(self, roadmap_id: str, items: list[TaskCreate]) -> list[Task]:
        """Append tasks and re-sort the roadmap by start date. Duplicate ids get fresh ones."""
        self.coordinator.ensure_mutable()
        roadmap = self.get_roadmap(roadmap_id)
        if not items:
            raise ValidationError("No tasks to import.")

        seen = {task.id for task in roadmap.tasks}
        new_tasks = []
        for item in items:
            task = item.to_task()
            if task.id in seen:
                task.id = str(uuid4())
            seen.add(task.id)
            new_tasks.append(task)

        roadmap.tasks.extend(new_tasks)
        roadmap.sort_tasks()
        await self.coordinator.persist()
        return new_tasks

    async def update_task(self, roadmap_id: str, task_id: str, update: TaskUpdate) -> Task:
        self.coordinator.ensure_mutable()
        task = self.get_task(roadmap_id, task_id)
        if update.completed is not None:
            task.completed = update.completed
        if update.notes is not None:
            task.notes = update.notes
        await self.coordinator.persist()
        return task

    async def toggle_task_completed(self, roadmap_id: str, task_id: str) -> Task:
        task = self.get_task(roadmap_id, task_id)
        return await self.update_task(roadmap_id, task_id, TaskUpdate(completed=not task.completed))

    async def update_task_notes(self, roadmap_id: str, task_id: str, notes: str) -> Task:
        return await self.update_task(roadmap_id, task_id, TaskUpdate(notes=notes))

    async def delete_task(self, roadmap_id: str, task_id: str) -> None:
        self.coordinator.ensure_mutable()
        roadmap = self.get_roadmap(roadmap_id)
        task = self.get_task(roadmap_id, task_id)
        roadmap.tasks.remove(task)
        if self.document.clear_pomodoro_reference(roadmap_id, task_id):
            logger.info("Cleared active Pomodoro task %s", task_id)
        await self.coordinator.persist()

    # ===========================================
    # Pomodoro
    # ===========================================

    async def set_active_pomodoro_task(
        self,
        roadmap_id: Optional[str],
        task_id: Optional[str],
    ) -> Optional[ActivePomodoroTaskDetails]:
        """Select the task the Pomodoro timer works on, or clear it."""
        self.coordinator.ensure_mutable()
        details = None
        if roadmap_id and task_id:
            task = self.get_task(roadmap_id, task_id)
            details = ActivePomodoroTaskDetails(
                roadmap_id=roadmap_id,
                task_id=task.id,
                task_name=task.name,
                task_category=task.category,
            )
        self.document.active_pomodoro_task_details = details
        await self.coordinator.persist()
        return details

    async def record_pomodoro_session(self, data: PomodoroSessionCreate) -> PomodoroSession:
        self.coordinator.ensure_mutable()
        task = self.get_task(data.roadmap_id, data.task_id)
        session = PomodoroSession(
            **data.model_dump(),
            id=str(uuid4()),
            task_name=task.name,
            task_category=task.category,
        )
        self.document.pomodoro_sessions.append(session)
        await self.coordinator.persist()
        return session
