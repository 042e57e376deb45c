"""Note CRUD, daily notes and [[wiki link]] resolution for DayDeck."""

from __future__ import annotations

import logging
import re
from datetime import date, datetime
from pathlib import Path
from typing import Any

from daydeck.fileio import read_yaml, write_yaml_atomic
from daydeck.models import Note, NotesFile
from daydeck.workspace import new_id, notes_path, timestamp

logger = logging.getLogger(__name__)

_WIKI_LINK_RE = re.compile(r"\[\[([^\]]+)\]\]")


def load_notes(root: Path | None = None) -> NotesFile:
    return NotesFile.from_dict(read_yaml(notes_path(root)))


def save_notes(notes_file: NotesFile, root: Path | None = None) -> None:
    write_yaml_atomic(notes_path(root), notes_file.to_dict())


def find_note(notes_file: NotesFile, note_id: str) -> Note | None:
    for n in notes_file.notes:
        if n.id == note_id:
            return n
    return None


def find_note_by_title(notes_file: NotesFile, title: str) -> Note | None:
    wanted = title.strip().lower()
    for n in notes_file.notes:
        if not n.is_archived and n.title.strip().lower() == wanted:
            return n
    return None


# ── Links ─────────────────────────────────────────────────────


def extract_wiki_links(content: str) -> list[str]:
    """Titles referenced as [[Title]], in order, without duplicates."""
    seen: list[str] = []
    for m in _WIKI_LINK_RE.finditer(content or ""):
        title = m.group(1).strip()
        if title and title not in seen:
            seen.append(title)
    return seen


def resolve_links(notes_file: NotesFile, note: Note) -> list[str]:
    """Ids of existing notes the note links to; unknown titles are dropped."""
    ids = []
    for title in extract_wiki_links(note.content):
        target = find_note_by_title(notes_file, title)
        if target and target.id != note.id:
            ids.append(target.id)
    return ids


def backlinks(notes_file: NotesFile, note: Note) -> list[Note]:
    """Unarchived notes whose content links to *note* by title."""
    marker = f"[[{note.title}]]"
    return [
        n for n in notes_file.notes
        if n.id != note.id and not n.is_archived and marker in n.content
    ]


# ── CRUD ──────────────────────────────────────────────────────


def create_note(notes_file: NotesFile, note_data: dict[str, Any], now: datetime | None = None) -> Note:
    """Create a note at the top of the list, resolving its [[links]]."""
    stamp = timestamp(now)
    data = dict(note_data)
    data.setdefault("id", new_id())
    data["createdAt"] = stamp
    data["updatedAt"] = stamp
    note = Note.from_dict(data)
    note.linked_notes = resolve_links(notes_file, note)
    notes_file.notes.insert(0, note)
    logger.info("Created note %s: %s", note.id, note.title)
    return note


def update_note(
    notes_file: NotesFile,
    note_id: str,
    updates: dict[str, Any],
    now: datetime | None = None,
) -> Note | None:
    note = find_note(notes_file, note_id)
    if not note:
        return None
    data = note.to_dict()
    data.update(updates)
    data["id"] = note.id
    data["createdAt"] = note.created_at
    data["updatedAt"] = timestamp(now)
    updated = Note.from_dict(data)
    updated.linked_notes = resolve_links(notes_file, updated)
    for i, n in enumerate(notes_file.notes):
        if n.id == note_id:
            notes_file.notes[i] = updated
            break
    return updated


def archive_note(notes_file: NotesFile, note_id: str, now: datetime | None = None) -> bool:
    return update_note(notes_file, note_id, {"isArchived": True}, now) is not None


def delete_note(notes_file: NotesFile, note_id: str) -> bool:
    for i, n in enumerate(notes_file.notes):
        if n.id == note_id:
            notes_file.notes.pop(i)
            logger.info("Deleted note %s", note_id)
            return True
    return False


# ── Daily notes ───────────────────────────────────────────────


def daily_note_title(day: str) -> str:
    """'2026-10-17' -> 'Saturday, October 17, 2026'."""
    d = date.fromisoformat(day)
    return f"{d.strftime('%A')}, {d.strftime('%B')} {d.day}, {d.year}"


def get_daily_note(notes_file: NotesFile, day: str) -> Note | None:
    for n in notes_file.notes:
        if n.is_daily_note and n.daily_note_date == day:
            return n
    return None


def get_or_create_daily_note(notes_file: NotesFile, day: str, now: datetime | None = None) -> Note:
    """Return the daily note for *day*, creating an empty one if needed.

    Raises ValueError if *day* is not an ISO date.
    """
    existing = get_daily_note(notes_file, day)
    if existing:
        return existing
    return create_note(
        notes_file,
        {
            "title": daily_note_title(day),
            "content": "",
            "isDailyNote": True,
            "dailyNoteDate": day,
        },
        now,
    )


# ── Search ────────────────────────────────────────────────────


NOTE_TYPES = ("all", "regular", "daily", "pinned")


def search_notes(
    notes_file: NotesFile,
    query: str = "",
    tag: str | None = None,
    note_type: str | None = None,
) -> list[Note]:
    """Unarchived notes matching *query* in title or content (any case).

    *tag* keeps notes carrying that tag; *note_type* is one of NOTE_TYPES.
    Pinned notes come first, then the most recently updated. Raises
    ValueError for an unknown *note_type*.
    """
    note_type = note_type or "all"
    if note_type not in NOTE_TYPES:
        raise ValueError(f"Invalid note type: {note_type}")
    needle = (query or "").strip().lower()

    matches = []
    for n in notes_file.notes:
        if n.is_archived:
            continue
        if needle and needle not in n.title.lower() and needle not in n.content.lower():
            continue
        if tag and tag not in n.tags:
            continue
        if note_type == "daily" and not n.is_daily_note:
            continue
        if note_type == "regular" and n.is_daily_note:
            continue
        if note_type == "pinned" and not n.is_pinned:
            continue
        matches.append(n)

    matches.sort(key=lambda n: n.updated_at, reverse=True)
    matches.sort(key=lambda n: not n.is_pinned)
    return matches
