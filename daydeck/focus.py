"""Focus timer sessions for DayDeck.

Pomodoro-style work/break sessions. At most one session is active; stopping
it records the elapsed minutes and moves it to history.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any

from daydeck.fileio import read_json, write_json_atomic
from daydeck.models import FocusSession, FocusState
from daydeck.workspace import focus_path, load_settings, new_id, now_local

logger = logging.getLogger(__name__)

SESSION_TYPES = ("work", "break")


def _load_focus_state(root: Path | None = None) -> FocusState:
    return FocusState.from_dict(read_json(focus_path(root)))


def _save_focus_state(state: FocusState, root: Path | None = None) -> None:
    write_json_atomic(focus_path(root), state.to_dict())


def start_session(
    task_id: str | None = None,
    session_type: str = "work",
    planned_minutes: int | None = None,
    root: Path | None = None,
) -> FocusSession:
    """Start a session. Raises ValueError if one is already active or the type is unknown.

    Without *planned_minutes* the pomodoro length from settings.yaml is used.
    """
    if session_type not in SESSION_TYPES:
        raise ValueError(f"Invalid session type: {session_type}")

    state = _load_focus_state(root)
    if state.active_session is not None:
        raise ValueError("A focus session is already active. Stop it first.")

    if planned_minutes is None:
        settings = load_settings(root)
        planned_minutes = (
            settings.pomodoro_work_minutes if session_type == "work" else settings.pomodoro_break_minutes
        )

    session = FocusSession(
        id=new_id(),
        task_id=task_id,
        start_time=now_local(root).isoformat(timespec="seconds"),
        planned_minutes=planned_minutes,
        type=session_type,
    )
    state.active_session = session
    _save_focus_state(state, root)
    logger.info("Started %s session %s", session_type, session.id)
    return session


def stop_session(root: Path | None = None) -> FocusSession:
    """Stop the active session and return it. Raises ValueError if none is active."""
    state = _load_focus_state(root)
    if state.active_session is None:
        raise ValueError("No active focus session to stop.")

    session = state.active_session
    now = now_local(root)
    session.end_time = now.isoformat(timespec="seconds")
    try:
        elapsed = (now - datetime.fromisoformat(session.start_time)).total_seconds() / 60
        session.duration = round(max(elapsed, 0.0), 1)
    except (ValueError, TypeError):
        session.duration = 0.0

    state.history.append(session)
    state.active_session = None
    _save_focus_state(state, root)
    logger.info("Stopped session %s after %.1f min", session.id, session.duration)
    return session


def get_active_session(root: Path | None = None) -> FocusSession | None:
    return _load_focus_state(root).active_session


def get_focus_state(root: Path | None = None) -> FocusState:
    return _load_focus_state(root)


def get_focus_stats(days: int = 7, root: Path | None = None) -> dict[str, Any]:
    """Work/break totals over sessions started in the last *days* days."""
    state = _load_focus_state(root)
    cutoff = now_local(root) - timedelta(days=days)

    recent = []
    for s in state.history:
        try:
            if datetime.fromisoformat(s.start_time) >= cutoff:
                recent.append(s)
        except (ValueError, TypeError):
            logger.debug("Skipping session %s with unreadable start time", s.id)

    work = [s for s in recent if s.type == "work"]
    work_minutes = sum(s.duration for s in work)
    return {
        "total_sessions": len(recent),
        "work_sessions": len(work),
        "break_sessions": len(recent) - len(work),
        "work_minutes": round(work_minutes, 1),
        "avg_work_minutes": round(work_minutes / len(work), 1) if work else 0,
    }
