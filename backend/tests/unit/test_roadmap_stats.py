"""
Unit tests for roadmap statistics.
"""

from datetime import date

from conftest import make_task
from roadmap_tracker.models.roadmap import Roadmap
from roadmap_tracker.services.roadmap_stats import calculate_stats, is_overdue

TODAY = date(2024, 6, 15)


def test_empty_roadmap_has_zero_stats():
    stats = calculate_stats(Roadmap(id="r1", name="Empty"), TODAY)

    assert stats.total_tasks == 0
    assert stats.completed_percentage == 0
    assert stats.overdue_percentage == 0


def test_completed_overdue_and_in_progress():
    roadmap = Roadmap(
        id="r1",
        name="Mixed",
        tasks=[
            make_task("done", date(2024, 6, 1), date(2024, 6, 2), completed=True),
            make_task("late", date(2024, 6, 1), date(2024, 6, 14)),
            make_task("future1", date(2024, 6, 20), date(2024, 6, 21)),
            make_task("future2", date(2024, 6, 10), date(2024, 6, 15)),
        ],
    )

    stats = calculate_stats(roadmap, TODAY)

    assert stats.total_tasks == 4
    assert (stats.completed_tasks, stats.overdue_tasks, stats.in_progress_tasks) == (1, 1, 2)
    assert (
        stats.completed_percentage,
        stats.overdue_percentage,
        stats.in_progress_percentage,
    ) == (25, 25, 50)


def test_percentages_round_half_up_independently():
    roadmap = Roadmap(
        id="r1",
        name="Thirds",
        tasks=[
            make_task("a", date(2024, 6, 1), date(2024, 6, 1), completed=True),
            make_task("b", date(2024, 6, 1), date(2024, 6, 1)),
            make_task("c", date(2024, 7, 1), date(2024, 7, 1)),
        ],
    )

    stats = calculate_stats(roadmap, TODAY)

    assert stats.completed_percentage == 33
    assert stats.overdue_percentage == 33
    assert stats.in_progress_percentage == 33


def test_half_percent_rounds_up():
    tasks = [make_task(str(i), date(2024, 7, 1), date(2024, 7, 1)) for i in range(8)]
    tasks[0].completed = True
    roadmap = Roadmap(id="r1", name="Eighths", tasks=tasks)

    stats = calculate_stats(roadmap, TODAY)

    # 1/8 = 12.5%, 7/8 = 87.5%
    assert stats.completed_percentage == 13
    assert stats.in_progress_percentage == 88


def test_completed_task_is_never_overdue():
    task = make_task("t1", date(2024, 1, 1), date(2024, 1, 2), completed=True)

    assert not is_overdue(task, TODAY)
