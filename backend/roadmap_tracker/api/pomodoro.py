"""
Pomodoro API endpoints.

Only the persisted state is handled here; the countdown runs client side.
"""

from typing import Optional

from fastapi import APIRouter, status

from roadmap_tracker.api.deps import RoadmapSvc
from roadmap_tracker.models.pomodoro import (
    ActivePomodoroTaskDetails,
    ActivePomodoroTaskRequest,
    PomodoroSession,
    PomodoroSessionCreate,
)

router = APIRouter()


@router.put("/active", response_model=Optional[ActivePomodoroTaskDetails])
async def set_active_task(request: ActivePomodoroTaskRequest, service: RoadmapSvc):
    """Select the task for the timer; send no task id to clear it."""
    return await service.set_active_pomodoro_task(request.roadmap_id, request.task_id)


@router.get("/sessions", response_model=list[PomodoroSession])
async def list_sessions(service: RoadmapSvc):
    return service.document.pomodoro_sessions


@router.post("/sessions", response_model=PomodoroSession, status_code=status.HTTP_201_CREATED)
async def record_session(data: PomodoroSessionCreate, service: RoadmapSvc):
    return await service.record_pomodoro_session(data)
