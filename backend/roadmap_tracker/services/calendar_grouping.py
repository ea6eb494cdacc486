"""
Calendar grouping of tasks.

Splits the date span covered by a set of tasks into consecutive day,
ISO week (Monday start) or month buckets, and selects the tasks that
overlap a bucket. Pure functions, no I/O.
"""

from __future__ import annotations

import calendar
from datetime import date, datetime, time, timedelta
from typing import Callable, Iterable, Sequence

from roadmap_tracker.models.enums import TimeScale
from roadmap_tracker.models.roadmap import TimeGroup, TimeGroupWithTasks
from roadmap_tracker.models.task import Task

# Builds the bucket containing the cursor and returns it with the next cursor.
BucketBuilder = Callable[[date], tuple[TimeGroup, date]]


def day_start(value: date) -> datetime:
    return datetime.combine(value, time.min)


def day_end(value: date) -> datetime:
    return datetime.combine(value, time.max)


def _short(value: date) -> str:
    return f"{value:%b} {value.day}"


def day_key(value: date) -> str:
    return value.isoformat()


def week_key(value: date) -> str:
    """ISO week key, e.g. ``2024-W01``. Uses the ISO week-numbering year."""
    iso_year, iso_week, _ = value.isocalendar()
    return f"{iso_year}-W{iso_week:02d}"


def month_key(value: date) -> str:
    return f"{value.year}-{value.month:02d}"


def _daily_bucket(cursor: date) -> tuple[TimeGroup, date]:
    group = TimeGroup(
        key=day_key(cursor),
        label=f"{cursor:%a}, {_short(cursor)}, {cursor.year}",
        start_date=day_start(cursor),
        end_date=day_end(cursor),
    )
    return group, cursor + timedelta(days=1)


def _weekly_bucket(cursor: date) -> tuple[TimeGroup, date]:
    iso_year, iso_week, _ = cursor.isocalendar()
    monday = date.fromisocalendar(iso_year, iso_week, 1)
    sunday = monday + timedelta(days=6)
    group = TimeGroup(
        key=week_key(monday),
        label=f"Week {iso_week}: {_short(monday)} - {_short(sunday)}, {sunday.year}",
        start_date=day_start(monday),
        end_date=day_end(sunday),
    )
    # Realign to the next Monday rather than cursor + 7.
    return group, monday + timedelta(days=7)


def _monthly_bucket(cursor: date) -> tuple[TimeGroup, date]:
    first = cursor.replace(day=1)
    last = first.replace(day=calendar.monthrange(first.year, first.month)[1])
    group = TimeGroup(
        key=month_key(first),
        label=f"{first:%B} {first.year}",
        start_date=day_start(first),
        end_date=day_end(last),
    )
    return group, last + timedelta(days=1)


_BUCKET_BUILDERS: dict[TimeScale, BucketBuilder] = {
    TimeScale.DAILY: _daily_bucket,
    TimeScale.WEEKLY: _weekly_bucket,
    TimeScale.MONTHLY: _monthly_bucket,
}


def group_tasks(tasks: Sequence[Task], time_scale: TimeScale | str) -> list[TimeGroup]:
    """
    Compute the buckets spanning all tasks.

    Args:
        tasks: Tasks to cover
        time_scale: Bucket granularity

    Returns:
        Buckets from the earliest start date to the latest end date, with no
        gaps or duplicates, sorted by start date. Empty for no tasks.
    """
    if not tasks:
        return []

    build = _BUCKET_BUILDERS[TimeScale(time_scale)]
    min_date = min(task.start_date for task in tasks)
    max_date = max(task.end_date for task in tasks)

    groups: dict[str, TimeGroup] = {}
    cursor = min_date
    while cursor <= max_date:
        group, cursor = build(cursor)
        groups.setdefault(group.key, group)

    return sorted(groups.values(), key=lambda group: group.start_date)


def task_overlaps_group(task: Task, group: TimeGroup) -> bool:
    """Inclusive overlap of the task's days with the bucket."""
    return day_start(task.start_date) <= group.end_date and day_start(task.end_date) >= group.start_date


def filter_tasks_for_group(tasks: Iterable[Task], group: TimeGroup) -> list[Task]:
    """Tasks overlapping the bucket. A task spanning several buckets is in each of them."""
    return [task for task in tasks if task_overlaps_group(task, group)]


def group_tasks_with_members(
    tasks: Sequence[Task],
    time_scale: TimeScale | str,
) -> list[TimeGroupWithTasks]:
    """Buckets together with their tasks, each list ordered by start date."""
    return [
        TimeGroupWithTasks(
            **group.model_dump(),
            tasks=sorted(filter_tasks_for_group(tasks, group), key=lambda task: task.start_date),
        )
        for group in group_tasks(tasks, time_scale)
    ]
