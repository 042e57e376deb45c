"""Weekly reflections (wins, lessons, notes) keyed by the week's Monday."""

from __future__ import annotations

from datetime import date, datetime, timedelta
from pathlib import Path
from typing import Any

from daydeck.fileio import read_yaml, write_yaml_atomic
from daydeck.habits import completions_for_week
from daydeck.models import PRIORITIES, HabitsFile, ReflectionsFile, TasksFile, WeeklyReflection
from daydeck.streaks import to_calendar_day
from daydeck.workspace import new_id, reflections_path, timestamp

EDITABLE_FIELDS = ("wins", "lessons", "notes")


def load_reflections(root: Path | None = None) -> ReflectionsFile:
    return ReflectionsFile.from_dict(read_yaml(reflections_path(root)))


def save_reflections(reflections_file: ReflectionsFile, root: Path | None = None) -> None:
    write_yaml_atomic(reflections_path(root), reflections_file.to_dict())


def week_start_for(day: str) -> str:
    """ISO date of the Monday starting the week that contains *day*."""
    d = date.fromisoformat(day)
    return (d - timedelta(days=d.weekday())).isoformat()


def get_or_create_weekly_reflection(
    reflections_file: ReflectionsFile,
    week_start: str,
    now: datetime | None = None,
) -> WeeklyReflection:
    """Find the reflection for a week, creating an empty one (newest first) if missing."""
    week_start = week_start_for(week_start)
    for r in reflections_file.reflections:
        if r.week_start == week_start:
            return r
    stamp = timestamp(now)
    reflection = WeeklyReflection(id=new_id(), week_start=week_start, created_at=stamp, updated_at=stamp)
    reflections_file.reflections.insert(0, reflection)
    reflections_file.reflections.sort(key=lambda r: r.week_start, reverse=True)
    return reflection


def update_weekly_reflection(
    reflections_file: ReflectionsFile,
    reflection_id: str,
    updates: dict[str, Any],
    now: datetime | None = None,
) -> WeeklyReflection | None:
    """Update wins/lessons/notes; other keys are ignored."""
    for r in reflections_file.reflections:
        if r.id == reflection_id:
            for key in EDITABLE_FIELDS:
                if key in updates:
                    setattr(r, key, str(updates[key] or ""))
            r.updated_at = timestamp(now)
            return r
    return None


# ── Weekly review ─────────────────────────────────────────────


def weekly_review(tasks_file: TasksFile, habits_file: HabitsFile, week_start: str) -> dict[str, Any]:
    """Task and habit figures for the Monday-to-Sunday week containing *week_start*.

    Tasks count towards the day their completedAt falls on. The habit rate is
    completed habit-days over (unarchived habits x 7), as a whole percent.
    """
    start = date.fromisoformat(week_start_for(week_start))
    days = [start + timedelta(days=i) for i in range(7)]

    completed_by_day: dict[date, int] = {d: 0 for d in days}
    by_priority = {p: 0 for p in PRIORITIES}
    by_tag: dict[str, int] = {}
    for task in tasks_file.tasks:
        if not task.completed_at:
            continue
        day = to_calendar_day(task.completed_at)
        if day not in completed_by_day:
            continue
        completed_by_day[day] += 1
        if task.priority in by_priority:
            by_priority[task.priority] += 1
        for tag in task.tags:
            by_tag[tag] = by_tag.get(tag, 0) + 1

    grid = completions_for_week(habits_file, days[-1].isoformat())
    counts = [sum(1 for c in row["weekCompletions"] if c["completed"]) for row in grid]
    possible = len(grid) * 7
    habit_done = sum(counts)
    best = None
    if grid:
        i = counts.index(max(counts))
        best = {"id": grid[i]["habit"]["id"], "name": grid[i]["habit"]["name"], "count": counts[i]}

    return {
        "weekStart": days[0].isoformat(),
        "weekEnd": days[-1].isoformat(),
        "tasks": {
            "completed": sum(completed_by_day.values()),
            "byPriority": by_priority,
            "byTag": by_tag,
        },
        "habits": {
            "completed": habit_done,
            "possible": possible,
            "completionRate": int(habit_done * 100 / possible + 0.5) if possible else 0,
            "bestHabit": best,
        },
        "dailyTrend": [
            {"date": d.isoformat(), "day": d.strftime("%a"), "count": completed_by_day[d]}
            for d in days
        ],
    }
