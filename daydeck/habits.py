"""Habit store: habits, completion toggling and streak views for DayDeck.

Completions are stored one record per (habit, day). Streaks are never
stored; they are recomputed from the completion dates on every read.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import Any

from daydeck.fileio import read_yaml, write_yaml_atomic
from daydeck.models import Habit, HabitCompletion, HabitsFile, HabitWithStreak
from daydeck.streaks import compute_streak
from daydeck.workspace import habits_path, new_id, timestamp

logger = logging.getLogger(__name__)


def load_habits(root: Path | None = None) -> HabitsFile:
    return HabitsFile.from_dict(read_yaml(habits_path(root)))


def save_habits(habits_file: HabitsFile, root: Path | None = None) -> None:
    write_yaml_atomic(habits_path(root), habits_file.to_dict())


def find_habit(habits_file: HabitsFile, habit_id: str) -> Habit | None:
    for h in habits_file.habits:
        if h.id == habit_id:
            return h
    return None


def create_habit(
    habits_file: HabitsFile,
    name: str,
    icon: str | None = None,
    color: str | None = None,
    now: datetime | None = None,
) -> tuple[Habit, list[str]]:
    if not name or not name.strip():
        return Habit(), ["Missing required field: name"]
    stamp = timestamp(now)
    data: dict[str, Any] = {"id": new_id(), "name": name.strip(), "createdAt": stamp, "updatedAt": stamp}
    if icon:
        data["icon"] = icon
    if color:
        data["color"] = color
    habit = Habit.from_dict(data)
    habits_file.habits.append(habit)
    logger.info("Created habit %s: %s", habit.id, habit.name)
    return habit, []


def delete_habit(habits_file: HabitsFile, habit_id: str) -> bool:
    """Delete a habit together with its completions."""
    habit = find_habit(habits_file, habit_id)
    if not habit:
        return False
    habits_file.habits.remove(habit)
    habits_file.completions = [c for c in habits_file.completions if c.habit_id != habit_id]
    logger.info("Deleted habit %s", habit_id)
    return True


def archive_habit(habits_file: HabitsFile, habit_id: str, now: datetime | None = None) -> bool:
    habit = find_habit(habits_file, habit_id)
    if not habit:
        return False
    habit.is_archived = True
    habit.updated_at = timestamp(now)
    return True


def completion_dates(habits_file: HabitsFile, habit_id: str) -> list[str]:
    """Completion dates for one habit, newest first."""
    dates = {c.completed_date for c in habits_file.completions if c.habit_id == habit_id}
    return sorted(dates, reverse=True)


def toggle_habit_completion(
    habits_file: HabitsFile,
    habit_id: str,
    day: str,
    now: datetime | None = None,
) -> bool | None:
    """Mark *day* done for a habit, or unmark it if already done.

    Returns True if a completion was added, False if one was removed and
    None if the habit does not exist. Raises ValueError for a non-ISO day.
    Any ISO spelling of the day is stored as YYYY-MM-DD.
    """
    day = date.fromisoformat(day).isoformat()
    if not find_habit(habits_file, habit_id):
        return None

    for c in habits_file.completions:
        if c.habit_id == habit_id and c.completed_date == day:
            habits_file.completions.remove(c)
            logger.info("Removed completion %s for habit %s", day, habit_id)
            return False

    habits_file.completions.insert(0, HabitCompletion(
        id=new_id(),
        habit_id=habit_id,
        completed_date=day,
        created_at=timestamp(now),
    ))
    logger.info("Added completion %s for habit %s", day, habit_id)
    return True


def habits_with_streaks(habits_file: HabitsFile, today: str) -> list[HabitWithStreak]:
    """Unarchived habits in creation order, each merged with its streaks."""
    views = []
    for habit in habits_file.habits:
        if habit.is_archived:
            continue
        dates = completion_dates(habits_file, habit.id)
        streak = compute_streak(dates, today)
        views.append(HabitWithStreak(
            habit=habit,
            current_streak=streak.current,
            longest_streak=streak.longest,
            completed_today=today in dates,
            completions=dates,
        ))
    return views


def completions_for_week(habits_file: HabitsFile, end_day: str) -> list[dict[str, Any]]:
    """Per-habit completion grid for the seven days ending on *end_day*."""
    end = date.fromisoformat(end_day)
    week = [(end - timedelta(days=6 - i)).isoformat() for i in range(7)]
    grid = []
    for view in habits_with_streaks(habits_file, end_day):
        done = set(view.completions)
        grid.append({
            "habit": view.to_dict(),
            "weekCompletions": [{"date": d, "completed": d in done} for d in week],
        })
    return grid
