"""Shared test fixtures for DayDeck tests."""

from __future__ import annotations

import os
from pathlib import Path

import pytest
import yaml


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Create a temporary workspace with settings, a task, a note and a habit."""
    root = tmp_path / "workspace"
    root.mkdir(parents=True)

    settings = {
        "timezone": "UTC",
        "default_view": "today",
        "pomodoro_work_minutes": 25,
        "pomodoro_break_minutes": 5,
    }
    (root / "settings.yaml").write_text(yaml.dump(settings, default_flow_style=False), encoding="utf-8")

    tasks = {
        "tasks": [
            {
                "id": "task-report",
                "title": "Finish the report",
                "priority": "high",
                "status": "todo",
                "dueDate": "2026-02-10",
                "tags": ["work"],
                "isArchived": False,
                "createdAt": "2026-02-01T09:00:00+00:00",
                "updatedAt": "2026-02-01T09:00:00+00:00",
            },
        ],
    }
    (root / "tasks.yaml").write_text(yaml.dump(tasks, default_flow_style=False), encoding="utf-8")

    notes = {
        "notes": [
            {
                "id": "note-ideas",
                "title": "Project ideas",
                "content": "See [[Reading list]] for sources.",
                "tags": ["ideas"],
                "createdAt": "2026-02-01T09:00:00+00:00",
                "updatedAt": "2026-02-01T09:00:00+00:00",
            },
            {
                "id": "note-reading",
                "title": "Reading list",
                "content": "",
                "createdAt": "2026-02-01T09:00:00+00:00",
                "updatedAt": "2026-02-01T09:00:00+00:00",
            },
        ],
    }
    (root / "notes.yaml").write_text(yaml.dump(notes, default_flow_style=False), encoding="utf-8")

    habits = {
        "habits": [
            {"id": "habit-run", "name": "Run", "icon": "🏃", "createdAt": "2026-02-01T09:00:00+00:00"},
        ],
        "completions": [
            {"id": "c1", "habitId": "habit-run", "completedDate": "2026-02-09"},
            {"id": "c2", "habitId": "habit-run", "completedDate": "2026-02-10"},
        ],
    }
    (root / "habits.yaml").write_text(yaml.dump(habits, allow_unicode=True), encoding="utf-8")

    os.environ["DAYDECK_ROOT"] = str(root)
    yield root
    if "DAYDECK_ROOT" in os.environ:
        del os.environ["DAYDECK_ROOT"]
