"""
Roadmap completion statistics.
"""

from __future__ import annotations

import math
from datetime import date
from typing import Optional

from roadmap_tracker.models.roadmap import Roadmap, RoadmapTaskStats
from roadmap_tracker.models.task import Task


def _percentage(count: int, total: int) -> int:
    # Half-up rounding. Each category is rounded on its own, so the
    # three percentages can add up to 99 or 101.
    return int(math.floor(count / total * 100 + 0.5))


def is_overdue(task: Task, today: date) -> bool:
    return not task.completed and task.end_date < today


def calculate_stats(roadmap: Roadmap, today: Optional[date] = None) -> RoadmapTaskStats:
    """
    Count completed, in-progress and overdue tasks.

    A task is overdue when it is not completed and its end date is before
    ``today`` (local date by default); any other incomplete task is in
    progress.
    """
    total = len(roadmap.tasks)
    if total == 0:
        return RoadmapTaskStats()

    today = today or date.today()
    completed = sum(1 for task in roadmap.tasks if task.completed)
    overdue = sum(1 for task in roadmap.tasks if is_overdue(task, today))
    in_progress = total - completed - overdue

    return RoadmapTaskStats(
        total_tasks=total,
        completed_tasks=completed,
        completed_percentage=_percentage(completed, total),
        in_progress_tasks=in_progress,
        in_progress_percentage=_percentage(in_progress, total),
        overdue_tasks=overdue,
        overdue_percentage=_percentage(overdue, total),
    )
