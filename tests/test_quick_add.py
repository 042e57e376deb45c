"""Tests for daydeck/quick_add.py — parse and create."""

from datetime import datetime, timezone

import yaml

from daydeck.models import Note, Task
from daydeck.notes import load_notes
from daydeck.quick_add import preview, quick_add
from daydeck.tasks import load_tasks

# Wednesday
NOW = datetime(2026, 2, 11, 10, 0, tzinfo=timezone.utc)
MONDAY = datetime(2026, 2, 16, 9, 0, tzinfo=timezone.utc)


def test_quick_add_task(workspace):
    parsed, record, errors = quick_add("Buy milk tomorrow high #errands", workspace, now=NOW)
    assert errors == []
    assert parsed.type == "task"
    assert isinstance(record, Task)
    saved = load_tasks(workspace).tasks[0]
    assert saved.title == "Buy milk"
    assert saved.due_date == "2026-02-12"
    assert saved.priority == "high"
    assert saved.tags == ["errands"]


def test_quick_add_task_defaults(workspace):
    _, record, _ = quick_add("Call the bank", workspace, now=NOW)
    assert record.due_date == "2026-02-11"
    assert record.priority == "medium"
    assert record.status == "todo"


def test_quick_add_note(workspace):
    parsed, record, errors = quick_add("memo: gift ideas #family", workspace, now=NOW)
    assert errors == []
    assert isinstance(record, Note)
    saved = load_notes(workspace).notes[0]
    assert saved.title == "gift ideas"
    assert saved.tags == ["family"]


def test_quick_add_blank(workspace):
    parsed, record, errors = quick_add("   ", workspace, now=NOW)
    assert parsed is None
    assert record is None
    assert errors


def test_quick_add_task_without_title(workspace):
    parsed, record, errors = quick_add("#work", workspace, now=NOW)
    assert parsed.tags == ["work"]
    assert record is None
    assert any("title" in e for e in errors)


def test_default_type_override(workspace):
    parsed = preview("Buy milk tomorrow", workspace, default_type="note", now=NOW)
    assert parsed.type == "note"
    assert parsed.due_date == "2026-02-12"


def test_weekday_resolution_setting(workspace):
    assert preview("Gym tuesday", workspace, now=MONDAY).due_date == "2026-02-24"
    settings = yaml.safe_load((workspace / "settings.yaml").read_text(encoding="utf-8"))
    settings["weekday_resolution"] = "next"
    (workspace / "settings.yaml").write_text(yaml.dump(settings), encoding="utf-8")
    assert preview("Gym tuesday", workspace, now=MONDAY).due_date == "2026-02-17"
