"""Quick add: parse one line and create the matching note or task."""

from __future__ import annotations

import dataclasses
import logging
from datetime import datetime
from pathlib import Path

from daydeck.models import Note, ParsedInput, Task
from daydeck.notes import create_note, load_notes, save_notes
from daydeck.quick_input import parse_quick_input
from daydeck.tasks import create_task, load_tasks, save_tasks
from daydeck.workspace import load_settings, now_local

logger = logging.getLogger(__name__)


def preview(
    text: str,
    root: Path | None = None,
    default_type: str | None = None,
    now: datetime | None = None,
) -> ParsedInput | None:
    """Parse *text* against the user's clock and settings without saving anything.

    Returns None for blank input. *default_type* ("note"/"task") overrides
    the detected classification.
    """
    if not text or not text.strip():
        return None
    if now is None:
        now = now_local(root)
    settings = load_settings(root)
    parsed = parse_quick_input(text, now, settings.weekday_resolution)
    if default_type in ("note", "task"):
        parsed = dataclasses.replace(parsed, type=default_type)
    return parsed


def quick_add(
    text: str,
    root: Path | None = None,
    default_type: str | None = None,
    now: datetime | None = None,
) -> tuple[ParsedInput | None, Note | Task | None, list[str]]:
    """Parse *text* and create a note or task in the workspace.

    Tasks without a detected date are due today and default to medium
    priority. Returns (parsed, created_record, errors).
    """
    if now is None:
        now = now_local(root)
    parsed = preview(text, root, default_type, now)
    if parsed is None:
        return None, None, ["Nothing to add"]

    if parsed.type == "note":
        notes_file = load_notes(root)
        note = create_note(notes_file, {"title": parsed.title, "content": "", "tags": parsed.tags}, now)
        save_notes(notes_file, root)
        return parsed, note, []

    tasks_file = load_tasks(root)
    task, errors = create_task(
        tasks_file,
        {
            "title": parsed.title,
            "dueDate": parsed.due_date or now.date().isoformat(),
            "priority": parsed.priority or "medium",
            "status": "todo",
            "tags": parsed.tags,
        },
        now,
    )
    if errors:
        logger.info("Quick add rejected %r: %s", text, errors)
        return parsed, None, errors
    save_tasks(tasks_file, root)
    return parsed, task, []
