"""
Roadmaps API endpoints.

CRUD operations for roadmaps and their tasks, plus grouped and
statistical views.
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Query, Response, status
from fastapi.responses import JSONResponse

from roadmap_tracker.api.deps import RoadmapSvc
from roadmap_tracker.models.roadmap import (
    Roadmap,
    RoadmapCreate,
    RoadmapSummary,
    RoadmapTaskStats,
    RoadmapUpdate,
    TimeGroupWithTasks,
)
from roadmap_tracker.models.task import Task, TaskCreate, TaskUpdate
from roadmap_tracker.services.roadmap_service import export_file_name

router = APIRouter()


@router.get("", response_model=list[RoadmapSummary])
async def list_roadmaps(
    service: RoadmapSvc,
    today: Optional[date] = Query(None, description="Reference date for overdue tasks"),
):
    """List roadmaps in display order, with stats."""
    return service.list_roadmaps(today)


@router.post("", response_model=Roadmap, status_code=status.HTTP_201_CREATED)
async def create_roadmap(data: RoadmapCreate, service: RoadmapSvc):
    return await service.create_roadmap(data)


@router.get("/{roadmap_id}", response_model=Roadmap)
async def get_roadmap(roadmap_id: str, service: RoadmapSvc):
    return service.get_roadmap(roadmap_id)


@router.patch("/{roadmap_id}", response_model=Roadmap)
async def update_roadmap(roadmap_id: str, update: RoadmapUpdate, service: RoadmapSvc):
    """Rename a roadmap or change its time scale."""
    return await service.update_roadmap(roadmap_id, update)


@router.delete("/{roadmap_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_roadmap(roadmap_id: str, service: RoadmapSvc):
    await service.delete_roadmap(roadmap_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{roadmap_id}/groups", response_model=list[TimeGroupWithTasks])
async def get_time_groups(roadmap_id: str, service: RoadmapSvc):
    """Time groups of the roadmap's scale, each with its overlapping tasks."""
    return service.get_time_groups(roadmap_id)


@router.get("/{roadmap_id}/stats", response_model=RoadmapTaskStats)
async def get_stats(
    roadmap_id: str,
    service: RoadmapSvc,
    today: Optional[date] = Query(None, description="Reference date for overdue tasks"),
):
    return service.get_stats(roadmap_id, today)


@router.get("/{roadmap_id}/export")
async def export_roadmap(roadmap_id: str, service: RoadmapSvc):
    """Download the roadmap as JSON."""
    roadmap = service.get_roadmap(roadmap_id)
    return JSONResponse(
        content=service.export_roadmap(roadmap_id),
        headers={"Content-Disposition": f'attachment; filename="{export_file_name(roadmap)}"'},
    )


@router.post("/{roadmap_id}/tasks", response_model=Task, status_code=status.HTTP_201_CREATED)
async def add_task(roadmap_id: str, data: TaskCreate, service: RoadmapSvc):
    return await service.add_task(roadmap_id, data)


@router.post(
    "/{roadmap_id}/tasks/import",
    response_model=list[Task],
    status_code=status.HTTP_201_CREATED,
)
async def import_tasks(roadmap_id: str, items: list[TaskCreate], service: RoadmapSvc):
    """Append a validated task list (e.g. parsed from CSV or JSON)."""
    return await service.import_tasks(roadmap_id, items)


@router.patch("/{roadmap_id}/tasks/{task_id}", response_model=Task)
async def update_task(roadmap_id: str, task_id: str, update: TaskUpdate, service: RoadmapSvc):
    """Set completion and/or notes."""
    return await service.update_task(roadmap_id, task_id, update)


@router.delete("/{roadmap_id}/tasks/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(roadmap_id: str, task_id: str, service: RoadmapSvc):
    await service.delete_task(roadmap_id, task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
