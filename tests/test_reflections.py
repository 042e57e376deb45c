"""Tests for daydeck/reflections.py — weekly reflections."""

from daydeck.models import HabitsFile, ReflectionsFile, Task, TasksFile
from daydeck.reflections import (
    get_or_create_weekly_reflection,
    load_reflections,
    save_reflections,
    update_weekly_reflection,
    week_start_for,
    weekly_review,
)


def test_week_start_for():
    assert week_start_for("2026-02-11") == "2026-02-09"
    assert week_start_for("2026-02-09") == "2026-02-09"
    assert week_start_for("2026-02-15") == "2026-02-09"


def test_get_or_create_is_idempotent():
    rf = ReflectionsFile()
    first = get_or_create_weekly_reflection(rf, "2026-02-11")
    second = get_or_create_weekly_reflection(rf, "2026-02-09")
    assert first is second
    assert first.week_start == "2026-02-09"
    assert len(rf.reflections) == 1


def test_newest_week_first():
    rf = ReflectionsFile()
    get_or_create_weekly_reflection(rf, "2026-02-02")
    get_or_create_weekly_reflection(rf, "2026-02-16")
    get_or_create_weekly_reflection(rf, "2026-02-09")
    assert [r.week_start for r in rf.reflections] == ["2026-02-16", "2026-02-09", "2026-02-02"]


def test_update_only_editable_fields():
    rf = ReflectionsFile()
    r = get_or_create_weekly_reflection(rf, "2026-02-11")
    updated = update_weekly_reflection(rf, r.id, {"wins": "Shipped", "weekStart": "1999-01-01"})
    assert updated.wins == "Shipped"
    assert updated.week_start == "2026-02-09"
    assert update_weekly_reflection(rf, "missing", {"wins": "x"}) is None


def test_save_and_reload(workspace):
    rf = load_reflections(workspace)
    r = get_or_create_weekly_reflection(rf, "2026-02-11")
    update_weekly_reflection(rf, r.id, {"lessons": "Sleep more"})
    save_reflections(rf, workspace)
    assert load_reflections(workspace).reflections[0].lessons == "Sleep more"


def _review_week():
    tasks = TasksFile(tasks=[
        Task(id="a", title="A", priority="high", status="done", tags=["work"],
             completed_at="2026-02-09T08:00:00+00:00"),
        Task(id="b", title="B", priority="low", status="done", tags=["work", "home"],
             completed_at="2026-02-11T18:30:00+00:00"),
        Task(id="c", title="C", status="done", completed_at="2026-02-11T07:00:00+00:00"),
        Task(id="d", title="D", priority="high", status="done", completed_at="2026-02-16T09:00:00+00:00"),
        Task(id="e", title="E", priority="high"),
    ])
    habits = HabitsFile.from_dict({
        "habits": [
            {"id": "h-run", "name": "Run"},
            {"id": "h-read", "name": "Read"},
        ],
        "completions": [
            {"id": "1", "habitId": "h-run", "completedDate": "2026-02-09"},
            {"id": "2", "habitId": "h-read", "completedDate": "2026-02-10"},
            {"id": "3", "habitId": "h-read", "completedDate": "2026-02-11"},
            {"id": "4", "habitId": "h-read", "completedDate": "2026-02-15"},
            {"id": "5", "habitId": "h-read", "completedDate": "2026-02-16"},
        ],
    })
    return tasks, habits


def test_weekly_review_tasks():
    tasks, habits = _review_week()
    review = weekly_review(tasks, habits, "2026-02-11")
    assert review["weekStart"] == "2026-02-09"
    assert review["weekEnd"] == "2026-02-15"
    assert review["tasks"] == {
        "completed": 3,
        "byPriority": {"low": 1, "medium": 1, "high": 1},
        "byTag": {"work": 2, "home": 1},
    }
    trend = review["dailyTrend"]
    assert [d["day"] for d in trend] == ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
    assert [d["count"] for d in trend] == [1, 0, 2, 0, 0, 0, 0]


def test_weekly_review_habits():
    tasks, habits = _review_week()
    stats = weekly_review(tasks, habits, "2026-02-09")["habits"]
    assert stats["completed"] == 4
    assert stats["possible"] == 14
    assert stats["completionRate"] == 29
    assert stats["bestHabit"] == {"id": "h-read", "name": "Read", "count": 3}


def test_weekly_review_empty_week():
    review = weekly_review(TasksFile(), HabitsFile(), "2026-02-11")
    assert review["tasks"]["completed"] == 0
    assert review["habits"]["completionRate"] == 0
    assert review["habits"]["bestHabit"] is None
