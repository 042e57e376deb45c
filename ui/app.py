from __future__ import annotations

import logging
import os
import secrets
from datetime import date
from typing import Any

from fastapi import Body, Depends, FastAPI, HTTPException, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from daydeck import (
    workspace_root,
    today_str,
    load_settings,
    update_settings,
    preview,
    quick_add,
    load_notes,
    save_notes,
    search_notes,
    get_or_create_daily_note,
    load_tasks,
    save_tasks,
    create_task,
    toggle_task,
    load_habits,
    save_habits,
    create_habit,
    delete_habit,
    toggle_habit_completion,
    habits_with_streaks,
    completions_for_week,
    load_reflections,
    save_reflections,
    get_or_create_weekly_reflection,
    update_weekly_reflection,
    weekly_review,
)
from daydeck.focus import get_focus_state, get_focus_stats, start_session, stop_session
from daydeck.tasks import completed_tasks, filter_tasks, overdue_tasks, tasks_due_on, upcoming_tasks

logging.basicConfig(
    level=os.environ.get("DAYDECK_LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


# ── Auth ──────────────────────────────────────────────────────

app = FastAPI(title="DayDeck API", version="0.1.0")

security = HTTPBasic(auto_error=False)


def get_current_user(credentials: HTTPBasicCredentials | None = Depends(security)) -> str:
    """HTTP basic auth when DAYDECK_USERNAME/DAYDECK_PASSWORD are set, else open."""
    expected_username = os.environ.get("DAYDECK_USERNAME", "")
    expected_password = os.environ.get("DAYDECK_PASSWORD", "")
    if not expected_username or not expected_password:
        return "guest"

    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Basic"},
        )

    correct_username = secrets.compare_digest(credentials.username.encode("utf-8"), expected_username.encode("utf-8"))
    correct_password = secrets.compare_digest(credentials.password.encode("utf-8"), expected_password.encode("utf-8"))
    if not (correct_username and correct_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Basic"},
        )
    return credentials.username


def _text_from(payload: dict[str, Any]) -> str:
    text = payload.get("text", "")
    if not isinstance(text, str):
        raise HTTPException(status_code=400, detail="text must be a string")
    return text


@app.get("/healthz")
def healthz() -> dict[str, str]:
    return {"ok": "true"}


# ── Quick add ─────────────────────────────────────────────────

@app.post("/api/parse")
def api_parse(payload: dict[str, Any] = Body(...), username: str = Depends(get_current_user)) -> dict[str, Any]:
    """Preview how a quick-add line would be classified."""
    parsed = preview(_text_from(payload), workspace_root(), payload.get("defaultType"))
    return {"parsed": parsed.to_dict() if parsed else None}


@app.post("/api/quick-add")
def api_quick_add(payload: dict[str, Any] = Body(...), username: str = Depends(get_current_user)) -> dict[str, Any]:
    parsed, record, errors = quick_add(_text_from(payload), workspace_root(), payload.get("defaultType"))
    if errors or parsed is None or record is None:
        raise HTTPException(status_code=400, detail="; ".join(errors) or "Nothing to add")
    return {"ok": True, "parsed": parsed.to_dict(), "type": parsed.type, "record": record.to_dict()}


# ── Tasks ─────────────────────────────────────────────────────

@app.get("/api/tasks")
def api_list_tasks(
    q: str = "",
    priority: str | None = None,
    username: str = Depends(get_current_user),
) -> dict[str, Any]:
    """Unarchived tasks matching the search, plus today/overdue/upcoming/completed ids."""
    root = workspace_root()
    tasks_file = load_tasks(root)
    today = today_str(root)

    def ids(tasks):
        return [t.id for t in filter_tasks(tasks, q, priority)]

    return {
        "tasks": [t.to_dict() for t in filter_tasks(tasks_file.tasks, q, priority)],
        "today": ids([t for t in tasks_due_on(tasks_file, today) if t.status == "todo"]),
        "overdue": ids(overdue_tasks(tasks_file, today)),
        "upcoming": ids(upcoming_tasks(tasks_file, today)),
        "completed": ids(completed_tasks(tasks_file)),
    }


@app.post("/api/tasks")
def api_create_task(payload: dict[str, Any] = Body(...), username: str = Depends(get_current_user)) -> dict[str, Any]:
    root = workspace_root()
    tasks_file = load_tasks(root)
    task, errors = create_task(tasks_file, payload)
    if errors:
        raise HTTPException(status_code=400, detail="; ".join(errors))
    save_tasks(tasks_file, root)
    return {"ok": True, "task": task.to_dict()}


@app.post("/api/tasks/{task_id}/toggle")
def api_toggle_task(task_id: str, username: str = Depends(get_current_user)) -> dict[str, Any]:
    root = workspace_root()
    tasks_file = load_tasks(root)
    task = toggle_task(tasks_file, task_id)
    if task is None:
        raise HTTPException(status_code=404, detail=f"Task not found: {task_id}")
    save_tasks(tasks_file, root)
    return {"ok": True, "task": task.to_dict()}


# ── Notes ─────────────────────────────────────────────────────

@app.get("/api/notes")
def api_list_notes(
    q: str = "",
    tag: str | None = None,
    type: str | None = None,
    username: str = Depends(get_current_user),
) -> dict[str, Any]:
    try:
        notes = search_notes(load_notes(workspace_root()), q, tag, type)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"notes": [n.to_dict() for n in notes]}


@app.get("/api/notes/daily/{day}")
def api_daily_note(day: str, username: str = Depends(get_current_user)) -> dict[str, Any]:
    root = workspace_root()
    notes_file = load_notes(root)
    try:
        note = get_or_create_daily_note(notes_file, day)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid date: {day}")
    save_notes(notes_file, root)
    return {"note": note.to_dict()}


# ── Habits ────────────────────────────────────────────────────

@app.get("/api/habits")
def api_list_habits(username: str = Depends(get_current_user)) -> dict[str, Any]:
    root = workspace_root()
    views = habits_with_streaks(load_habits(root), today_str(root))
    return {"habits": [v.to_dict() for v in views]}


@app.post("/api/habits")
def api_create_habit(payload: dict[str, Any] = Body(...), username: str = Depends(get_current_user)) -> dict[str, Any]:
    root = workspace_root()
    habits_file = load_habits(root)
    habit, errors = create_habit(habits_file, str(payload.get("name", "")), payload.get("icon"), payload.get("color"))
    if errors:
        raise HTTPException(status_code=400, detail="; ".join(errors))
    save_habits(habits_file, root)
    return {"ok": True, "habit": habit.to_dict()}


@app.delete("/api/habits/{habit_id}")
def api_delete_habit(habit_id: str, username: str = Depends(get_current_user)) -> dict[str, Any]:
    root = workspace_root()
    habits_file = load_habits(root)
    if not delete_habit(habits_file, habit_id):
        raise HTTPException(status_code=404, detail=f"Habit not found: {habit_id}")
    save_habits(habits_file, root)
    return {"ok": True, "habit_id": habit_id}


@app.post("/api/habits/{habit_id}/toggle")
def api_toggle_habit(
    habit_id: str,
    payload: dict[str, Any] = Body(default={}),
    username: str = Depends(get_current_user),
) -> dict[str, Any]:
    """Toggle a completion for a day (default today)."""
    root = workspace_root()
    raw = str(payload.get("date") or today_str(root))
    try:
        day = date.fromisoformat(raw).isoformat()
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid date: {raw}")
    habits_file = load_habits(root)
    added = toggle_habit_completion(habits_file, habit_id, day)
    if added is None:
        raise HTTPException(status_code=404, detail=f"Habit not found: {habit_id}")
    save_habits(habits_file, root)
    return {"ok": True, "added": added, "date": day}


@app.get("/api/habits/week")
def api_habits_week(end: str | None = None, username: str = Depends(get_current_user)) -> dict[str, Any]:
    root = workspace_root()
    try:
        grid = completions_for_week(load_habits(root), end or today_str(root))
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid date: {end}")
    return {"week": grid}


# ── Focus ─────────────────────────────────────────────────────

@app.post("/api/focus/start")
def api_focus_start(payload: dict[str, Any] = Body(default={}), username: str = Depends(get_current_user)) -> dict[str, Any]:
    planned = payload.get("plannedMinutes")
    if planned is not None:
        try:
            planned = int(planned)
        except (TypeError, ValueError):
            raise HTTPException(status_code=400, detail=f"plannedMinutes must be a whole number: {planned}")
        if planned <= 0:
            raise HTTPException(status_code=400, detail="plannedMinutes must be positive")
    try:
        session = start_session(
            task_id=payload.get("taskId"),
            session_type=str(payload.get("type", "work")),
            planned_minutes=planned,
            root=workspace_root(),
        )
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return {"ok": True, "session": session.to_dict()}


@app.post("/api/focus/stop")
def api_focus_stop(username: str = Depends(get_current_user)) -> dict[str, Any]:
    try:
        session = stop_session(root=workspace_root())
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return {"ok": True, "session": session.to_dict()}


@app.get("/api/focus/current")
def api_focus_current(username: str = Depends(get_current_user)) -> dict[str, Any]:
    root = workspace_root()
    state = get_focus_state(root)
    return {
        "active_session": state.active_session.to_dict() if state.active_session else None,
        "recent_sessions": len(state.history),
        "stats_7day": get_focus_stats(days=7, root=root),
    }


# ── Weekly reflections ────────────────────────────────────────

@app.get("/api/reflections/current")
def api_current_reflection(username: str = Depends(get_current_user)) -> dict[str, Any]:
    root = workspace_root()
    reflections_file = load_reflections(root)
    reflection = get_or_create_weekly_reflection(reflections_file, today_str(root))
    save_reflections(reflections_file, root)
    return {"reflection": reflection.to_dict()}


@app.get("/api/reflections/review")
def api_weekly_review(week: str | None = None, username: str = Depends(get_current_user)) -> dict[str, Any]:
    """Completed-task and habit figures for the week containing *week* (default this week)."""
    root = workspace_root()
    try:
        review = weekly_review(load_tasks(root), load_habits(root), week or today_str(root))
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid date: {week}")
    return {"review": review}


@app.put("/api/reflections/{reflection_id}")
def api_update_reflection(
    reflection_id: str,
    payload: dict[str, Any] = Body(...),
    username: str = Depends(get_current_user),
) -> dict[str, Any]:
    root = workspace_root()
    reflections_file = load_reflections(root)
    reflection = update_weekly_reflection(reflections_file, reflection_id, payload)
    if reflection is None:
        raise HTTPException(status_code=404, detail=f"Reflection not found: {reflection_id}")
    save_reflections(reflections_file, root)
    return {"ok": True, "reflection": reflection.to_dict()}


# ── Settings ──────────────────────────────────────────────────

@app.get("/api/settings")
def api_get_settings(username: str = Depends(get_current_user)) -> dict[str, Any]:
    return {"settings": load_settings(workspace_root()).to_dict()}


@app.put("/api/settings")
def api_update_settings(payload: dict[str, Any] = Body(...), username: str = Depends(get_current_user)) -> dict[str, Any]:
    try:
        settings = update_settings(payload, workspace_root())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"ok": True, "settings": settings.to_dict()}
