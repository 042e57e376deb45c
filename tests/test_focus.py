"""Tests for daydeck/focus.py — focus session lifecycle."""

import pytest

from daydeck.focus import (
    get_active_session,
    get_focus_state,
    get_focus_stats,
    start_session,
    stop_session,
)


def test_start_session_uses_pomodoro_settings(workspace):
    session = start_session("task-report", root=workspace)
    assert session.task_id == "task-report"
    assert session.type == "work"
    assert session.planned_minutes == 25


def test_break_session_length(workspace):
    session = start_session(session_type="break", root=workspace)
    assert session.planned_minutes == 5
    assert session.task_id is None


def test_invalid_session_type(workspace):
    with pytest.raises(ValueError, match="Invalid session type"):
        start_session(session_type="nap", root=workspace)


def test_start_session_already_active(workspace):
    start_session("task-1", root=workspace)
    with pytest.raises(ValueError, match="already active"):
        start_session("task-2", root=workspace)


def test_stop_session(workspace):
    start_session("task-1", planned_minutes=50, root=workspace)
    session = stop_session(root=workspace)
    assert session.end_time is not None
    assert session.duration >= 0
    assert get_active_session(root=workspace) is None


def test_stop_session_no_active(workspace):
    with pytest.raises(ValueError, match="No active"):
        stop_session(root=workspace)


def test_focus_stats_empty(workspace):
    stats = get_focus_stats(days=7, root=workspace)
    assert stats["total_sessions"] == 0
    assert stats["avg_work_minutes"] == 0


def test_full_focus_lifecycle(workspace):
    """Work -> stop -> break -> stop -> stats."""
    start_session("task-1", root=workspace)
    stop_session(root=workspace)
    start_session(session_type="break", root=workspace)
    stop_session(root=workspace)

    state = get_focus_state(root=workspace)
    assert state.active_session is None
    assert [s.type for s in state.history] == ["work", "break"]

    stats = get_focus_stats(days=7, root=workspace)
    assert stats["total_sessions"] == 2
    assert stats["work_sessions"] == 1
    assert stats["break_sessions"] == 1
