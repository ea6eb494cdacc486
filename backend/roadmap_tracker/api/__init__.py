"""API routers."""

from roadmap_tracker.api import pomodoro, roadmaps, settings

__all__ = [
    "roadmaps",
    "settings",
    "pomodoro",
]
