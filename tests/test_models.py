"""Tests for daydeck/models.py — dataclass serialization."""

from daydeck.models import (
    FocusSession,
    FocusState,
    Habit,
    HabitsFile,
    Note,
    ParsedInput,
    Settings,
    Task,
    TasksFile,
)


def test_parsed_input_to_dict_omits_absent_fields():
    p = ParsedInput(type="note", title="Idea")
    assert p.to_dict() == {"type": "note", "title": "Idea", "tags": []}
    p = ParsedInput(type="task", title="Pay", due_date="2026-02-12", priority="high", tags=["bills"])
    assert p.to_dict() == {
        "type": "task",
        "title": "Pay",
        "dueDate": "2026-02-12",
        "priority": "high",
        "tags": ["bills"],
    }


def test_task_defaults():
    t = Task.from_dict({"title": "T"})
    assert t.priority == "medium"
    assert t.status == "todo"
    assert t.tags == []
    assert t.is_archived is False


def test_task_roundtrip():
    data = {
        "id": "t1",
        "title": "Gym",
        "priority": "low",
        "status": "todo",
        "tags": ["health"],
        "dueDate": "2026-02-12",
        "dueTime": "07:30",
        "isRecurring": True,
        "recurringPattern": "daily",
        "isArchived": False,
        "createdAt": "a",
        "updatedAt": "b",
    }
    tf = TasksFile.from_dict({"tasks": [data]})
    assert tf.to_dict() == {"tasks": [data]}


def test_note_from_dict_ignores_bad_lists():
    n = Note.from_dict({"title": "N", "tags": "oops", "isDailyNote": True, "dailyNoteDate": "2026-02-11"})
    assert n.tags == []
    assert n.to_dict()["dailyNoteDate"] == "2026-02-11"


def test_habits_file_from_dict():
    hf = HabitsFile.from_dict({
        "habits": [{"id": "h", "name": "Read"}, "junk"],
        "completions": [{"id": "c", "habitId": "h", "completedDate": "2026-02-11"}],
    })
    assert [h.name for h in hf.habits] == ["Read"]
    assert hf.completions[0].habit_id == "h"
    assert Habit.from_dict({}).icon == "✓"


def test_settings_defaults_and_fallback():
    assert Settings.from_dict({}).weekday_resolution == "anchored"
    s = Settings.from_dict({"timezone": "Europe/Berlin", "weekday_resolution": "sideways"})
    assert s.timezone == "Europe/Berlin"
    assert s.weekday_resolution == "anchored"
    assert Settings.from_dict({"weekday_resolution": "NEXT"}).weekday_resolution == "next"


def test_focus_state_roundtrip():
    session = FocusSession(id="s", task_id="t", start_time="2026-02-11T10:00:00+00:00", type="work")
    state = FocusState(active_session=session)
    restored = FocusState.from_dict(state.to_dict())
    assert restored.active_session == session
    assert FocusState.from_dict({}).active_session is None
