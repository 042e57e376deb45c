"""Workspace root, settings, clock and path helpers for DayDeck."""

from __future__ import annotations

import logging
import os
import uuid
from datetime import datetime
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml

from daydeck.fileio import read_yaml, write_yaml_atomic
from daydeck.models import Settings

logger = logging.getLogger(__name__)


def workspace_root() -> Path:
    """Directory holding the workspace documents ($DAYDECK_ROOT, default ~/daydeck)."""
    return Path(
        os.environ.get("DAYDECK_ROOT", str(Path.home() / "daydeck"))
    ).expanduser().resolve()


def load_settings(root: Path | None = None) -> Settings:
    """Load settings.yaml; unreadable or missing settings fall back to defaults."""
    try:
        return Settings.from_dict(read_yaml(settings_path(root)))
    except (OSError, ValueError, TypeError, yaml.YAMLError) as e:
        logger.warning("Could not read settings.yaml, using defaults: %s", e)
        return Settings()


def save_settings(settings: Settings, root: Path | None = None) -> None:
    write_yaml_atomic(settings_path(root), settings.to_dict())


def update_settings(updates: dict[str, Any], root: Path | None = None) -> Settings:
    """Merge known keys from *updates* into settings.yaml and save.

    Unknown keys are ignored. Raises ValueError for a value of the wrong type
    or an unknown timezone.
    """
    data = load_settings(root).to_dict()
    for key, value in updates.items():
        if key in data:
            data[key] = value
    try:
        settings = Settings.from_dict(data)
    except TypeError as e:
        raise ValueError(str(e)) from e
    try:
        ZoneInfo(settings.timezone)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValueError(f"Unknown timezone: {settings.timezone}") from e
    save_settings(settings, root)
    logger.info("Updated settings: %s", ", ".join(k for k in updates if k in data))
    return settings


def get_user_timezone(root: Path | None = None) -> ZoneInfo:
    """User's timezone from settings.yaml, defaulting to UTC."""
    name = load_settings(root).timezone or "UTC"
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown timezone %r in settings, using UTC", name)
        return ZoneInfo("UTC")


def now_local(root: Path | None = None) -> datetime:
    """Current datetime in the user's timezone."""
    return datetime.now(get_user_timezone(root))


def today_str(root: Path | None = None) -> str:
    """Today's date (YYYY-MM-DD) in the user's timezone."""
    return now_local(root).date().isoformat()


def new_id() -> str:
    return str(uuid.uuid4())


def timestamp(now: datetime | None = None) -> str:
    """ISO timestamp (seconds) for createdAt/updatedAt fields."""
    if now is None:
        now = datetime.now().astimezone()
    return now.isoformat(timespec="seconds")


# ── Path helpers ──────────────────────────────────────────────

def settings_path(root: Path | None = None) -> Path:
    if root is None:
        root = workspace_root()
    return root / "settings.yaml"


def notes_path(root: Path | None = None) -> Path:
    if root is None:
        root = workspace_root()
    return root / "notes.yaml"


def tasks_path(root: Path | None = None) -> Path:
    if root is None:
        root = workspace_root()
    return root / "tasks.yaml"


def habits_path(root: Path | None = None) -> Path:
    if root is None:
        root = workspace_root()
    return root / "habits.yaml"


def reflections_path(root: Path | None = None) -> Path:
    if root is None:
        root = workspace_root()
    return root / "reflections.yaml"


def focus_path(root: Path | None = None) -> Path:
    if root is None:
        root = workspace_root()
    return root / "focus.json"
