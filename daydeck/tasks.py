"""Task CRUD, validation and lifecycle for DayDeck."""

from __future__ import annotations

import logging
import re
from datetime import date, datetime
from pathlib import Path
from typing import Any

from daydeck.fileio import read_yaml, write_yaml_atomic
from daydeck.models import PRIORITIES, Task, TasksFile
from daydeck.workspace import new_id, tasks_path, timestamp

logger = logging.getLogger(__name__)


# ── Validation ────────────────────────────────────────────────


VALID_STATUSES = {"todo", "done"}
VALID_RECURRING_PATTERNS = {"daily", "weekly", "monthly"}

_TIME_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def _is_iso_date(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def validate_task(task: dict[str, Any]) -> list[str]:
    """Validate a task dict (camelCase keys) and return errors (empty if valid)."""
    errors = []
    title = task.get("title")
    if not isinstance(title, str) or not title.strip():
        errors.append("Missing required field: title")
    if "priority" in task and task["priority"] not in PRIORITIES:
        errors.append(f"Invalid priority: {task['priority']}")
    if "status" in task and task["status"] not in VALID_STATUSES:
        errors.append(f"Invalid status: {task['status']}")
    if task.get("dueDate") is not None and not _is_iso_date(task["dueDate"]):
        errors.append(f"dueDate must be YYYY-MM-DD: {task['dueDate']}")
    if task.get("dueTime") is not None and not _TIME_RE.match(str(task["dueTime"])):
        errors.append(f"dueTime must be HH:MM: {task['dueTime']}")
    pattern = task.get("recurringPattern")
    if pattern is not None and pattern not in VALID_RECURRING_PATTERNS:
        errors.append(f"Invalid recurringPattern: {pattern}")
    if "tags" in task and not isinstance(task["tags"], list):
        errors.append("tags must be a list")
    return errors


# ── CRUD ──────────────────────────────────────────────────────


def load_tasks(root: Path | None = None) -> TasksFile:
    return TasksFile.from_dict(read_yaml(tasks_path(root)))


def save_tasks(tasks_file: TasksFile, root: Path | None = None) -> None:
    write_yaml_atomic(tasks_path(root), tasks_file.to_dict())


def find_task(tasks_file: TasksFile, task_id: str) -> Task | None:
    for t in tasks_file.tasks:
        if t.id == task_id:
            return t
    return None


def create_task(
    tasks_file: TasksFile,
    task_data: dict[str, Any],
    now: datetime | None = None,
) -> tuple[Task, list[str]]:
    """Create a task and put it at the top of the list. Returns (task, errors)."""
    errors = validate_task(task_data)
    if errors:
        return Task(), errors

    stamp = timestamp(now)
    data = dict(task_data)
    data.setdefault("id", new_id())
    if find_task(tasks_file, str(data["id"])):
        return Task(), [f"Task ID already exists: {data['id']}"]
    data["createdAt"] = stamp
    data["updatedAt"] = stamp

    task = Task.from_dict(data)
    tasks_file.tasks.insert(0, task)
    logger.info("Created task %s: %s", task.id, task.title)
    return task, []


def update_task(
    tasks_file: TasksFile,
    task_id: str,
    updates: dict[str, Any],
    now: datetime | None = None,
) -> tuple[Task | None, list[str]]:
    """Apply camelCase field updates to a task. Returns (updated_task, errors)."""
    task = find_task(tasks_file, task_id)
    if not task:
        return None, [f"Task not found: {task_id}"]

    task_dict = task.to_dict()
    task_dict.update(updates)
    task_dict["id"] = task.id
    task_dict["createdAt"] = task.created_at

    errors = validate_task(task_dict)
    if errors:
        return None, errors

    task_dict["updatedAt"] = timestamp(now)
    updated = Task.from_dict(task_dict)
    for i, t in enumerate(tasks_file.tasks):
        if t.id == task_id:
            tasks_file.tasks[i] = updated
            break
    return updated, []


def toggle_task(tasks_file: TasksFile, task_id: str, now: datetime | None = None) -> Task | None:
    """Flip a task between todo and done; completedAt is set on completion and cleared on reopen."""
    task = find_task(tasks_file, task_id)
    if not task:
        return None
    stamp = timestamp(now)
    if task.status == "done":
        task.status = "todo"
        task.completed_at = None
    else:
        task.status = "done"
        task.completed_at = stamp
    task.updated_at = stamp
    return task


def archive_task(tasks_file: TasksFile, task_id: str, now: datetime | None = None) -> bool:
    task, errors = update_task(tasks_file, task_id, {"isArchived": True}, now)
    return task is not None and not errors


def delete_task(tasks_file: TasksFile, task_id: str) -> bool:
    for i, t in enumerate(tasks_file.tasks):
        if t.id == task_id:
            tasks_file.tasks.pop(i)
            logger.info("Deleted task %s", task_id)
            return True
    return False


# ── Queries ───────────────────────────────────────────────────


def active_tasks(tasks_file: TasksFile) -> list[Task]:
    return [t for t in tasks_file.tasks if not t.is_archived]


def tasks_due_on(tasks_file: TasksFile, day: str) -> list[Task]:
    """Unarchived tasks due on the given ISO date, open tasks first."""
    due = [t for t in active_tasks(tasks_file) if t.due_date == day]
    return sorted(due, key=lambda t: t.status == "done")


def overdue_tasks(tasks_file: TasksFile, today: str) -> list[Task]:
    """Open, unarchived tasks whose due date is before today, oldest first."""
    overdue = [
        t for t in active_tasks(tasks_file)
        if t.status == "todo" and t.due_date and t.due_date < today
    ]
    return sorted(overdue, key=lambda t: t.due_date or "")


def upcoming_tasks(tasks_file: TasksFile, today: str) -> list[Task]:
    """Open, unarchived tasks due after today, soonest first."""
    upcoming = [
        t for t in active_tasks(tasks_file)
        if t.status == "todo" and t.due_date and t.due_date > today
    ]
    return sorted(upcoming, key=lambda t: t.due_date or "")


def completed_tasks(tasks_file: TasksFile) -> list[Task]:
    return [t for t in active_tasks(tasks_file) if t.status == "done"]


def filter_tasks(tasks: list[Task], query: str = "", priority: str | None = None) -> list[Task]:
    """Keep unarchived tasks whose title contains *query* (any case) and, if given, with *priority*."""
    needle = (query or "").strip().lower()
    return [
        t for t in tasks
        if not t.is_archived
        and (not needle or needle in t.title.lower())
        and (not priority or t.priority == priority)
    ]


def search_tasks(tasks_file: TasksFile, query: str = "", priority: str | None = None) -> list[Task]:
    return filter_tasks(tasks_file.tasks, query, priority)
