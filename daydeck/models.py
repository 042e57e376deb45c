"""Typed dataclasses for the DayDeck data model.

Stored records use from_dict/to_dict for YAML/JSON serialization.
camelCase on disk is mapped to snake_case in Python.
Unknown keys are ignored; missing keys use defaults.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


PRIORITIES = ("low", "medium", "high")


def _str_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(v) for v in value]


# ── Quick input & streaks ─────────────────────────────────────


@dataclass(frozen=True)
class ParsedInput:
    """Result of classifying one quick-add line."""

    type: str  # note, task
    title: str
    due_date: str | None = None  # ISO date
    priority: str | None = None  # low, medium, high
    tags: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"type": self.type, "title": self.title}
        if self.due_date is not None:
            d["dueDate"] = self.due_date
        if self.priority is not None:
            d["priority"] = self.priority
        d["tags"] = list(self.tags)
        return d


@dataclass(frozen=True)
class StreakResult:
    current: int = 0
    longest: int = 0

    def to_dict(self) -> dict[str, int]:
        return {"current": self.current, "longest": self.longest}


# ── Settings ──────────────────────────────────────────────────


@dataclass
class Settings:
    timezone: str = "UTC"
    default_view: str = "today"  # today, notes, tasks
    pomodoro_work_minutes: int = 25
    pomodoro_break_minutes: int = 5
    weekday_resolution: str = "anchored"  # anchored, next

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Settings:
        if not d or not isinstance(d, dict):
            return cls()
        resolution = str(d.get("weekday_resolution", "anchored")).strip().lower()
        return cls(
            timezone=str(d.get("timezone", "UTC")),
            default_view=str(d.get("default_view", "today")),
            pomodoro_work_minutes=int(d.get("pomodoro_work_minutes", 25)),
            pomodoro_break_minutes=int(d.get("pomodoro_break_minutes", 5)),
            weekday_resolution=resolution if resolution in ("anchored", "next") else "anchored",
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "timezone": self.timezone,
            "default_view": self.default_view,
            "pomodoro_work_minutes": self.pomodoro_work_minutes,
            "pomodoro_break_minutes": self.pomodoro_break_minutes,
            "weekday_resolution": self.weekday_resolution,
        }


# ── Notes ─────────────────────────────────────────────────────


@dataclass
class Note:
    id: str = ""
    title: str = ""
    content: str = ""
    tags: list[str] = field(default_factory=list)
    is_pinned: bool = False
    is_archived: bool = False
    is_daily_note: bool = False
    daily_note_date: str | None = None  # ISO date, daily notes only
    linked_notes: list[str] = field(default_factory=list)
    created_at: str = ""
    updated_at: str = ""

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Note:
        return cls(
            id=str(d.get("id", "")),
            title=str(d.get("title", "")),
            content=str(d.get("content", "")),
            tags=_str_list(d.get("tags")),
            is_pinned=bool(d.get("isPinned", False)),
            is_archived=bool(d.get("isArchived", False)),
            is_daily_note=bool(d.get("isDailyNote", False)),
            daily_note_date=d.get("dailyNoteDate"),
            linked_notes=_str_list(d.get("linkedNotes")),
            created_at=str(d.get("createdAt", "")),
            updated_at=str(d.get("updatedAt", "")),
        )

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "tags": self.tags,
            "isPinned": self.is_pinned,
            "isArchived": self.is_archived,
            "isDailyNote": self.is_daily_note,
        }
        if self.daily_note_date:
            d["dailyNoteDate"] = self.daily_note_date
        d["linkedNotes"] = self.linked_notes
        d["createdAt"] = self.created_at
        d["updatedAt"] = self.updated_at
        return d


@dataclass
class NotesFile:
    notes: list[Note] = field(default_factory=list)

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> NotesFile:
        if not d or not isinstance(d, dict):
            return cls()
        return cls(notes=[Note.from_dict(n) for n in (d.get("notes") or []) if isinstance(n, dict)])

    def to_dict(self) -> dict[str, Any]:
        return {"notes": [n.to_dict() for n in self.notes]}


# ── Tasks ─────────────────────────────────────────────────────


@dataclass
class Task:
    id: str = ""
    title: str = ""
    description: str = ""
    due_date: str | None = None  # ISO date
    due_time: str | None = None  # HH:MM
    priority: str = "medium"  # low, medium, high
    status: str = "todo"  # todo, done
    tags: list[str] = field(default_factory=list)
    is_recurring: bool = False
    recurring_pattern: str | None = None  # daily, weekly, monthly
    linked_note_id: str | None = None
    is_archived: bool = False
    completed_at: str | None = None
    created_at: str = ""
    updated_at: str = ""

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Task:
        return cls(
            id=str(d.get("id", "")),
            title=str(d.get("title", "")),
            description=str(d.get("description", "") or ""),
            due_date=d.get("dueDate"),
            due_time=d.get("dueTime"),
            priority=str(d.get("priority", "medium")),
            status=str(d.get("status", "todo")),
            tags=_str_list(d.get("tags")),
            is_recurring=bool(d.get("isRecurring", False)),
            recurring_pattern=d.get("recurringPattern"),
            linked_note_id=d.get("linkedNoteId"),
            is_archived=bool(d.get("isArchived", False)),
            completed_at=d.get("completedAt"),
            created_at=str(d.get("createdAt", "")),
            updated_at=str(d.get("updatedAt", "")),
        )

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "priority": self.priority,
            "status": self.status,
            "tags": self.tags,
        }
        if self.description:
            d["description"] = self.description
        if self.due_date:
            d["dueDate"] = self.due_date
        if self.due_time:
            d["dueTime"] = self.due_time
        if self.is_recurring:
            d["isRecurring"] = True
            if self.recurring_pattern:
                d["recurringPattern"] = self.recurring_pattern
        if self.linked_note_id:
            d["linkedNoteId"] = self.linked_note_id
        d["isArchived"] = self.is_archived
        if self.completed_at:
            d["completedAt"] = self.completed_at
        d["createdAt"] = self.created_at
        d["updatedAt"] = self.updated_at
        return d


@dataclass
class TasksFile:
    tasks: list[Task] = field(default_factory=list)

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> TasksFile:
        if not d or not isinstance(d, dict):
            return cls()
        return cls(tasks=[Task.from_dict(t) for t in (d.get("tasks") or []) if isinstance(t, dict)])

    def to_dict(self) -> dict[str, Any]:
        return {"tasks": [t.to_dict() for t in self.tasks]}


# ── Habits ────────────────────────────────────────────────────


@dataclass
class Habit:
    id: str = ""
    name: str = ""
    icon: str = "✓"
    color: str = "hsl(220, 70%, 50%)"
    is_archived: bool = False
    created_at: str = ""
    updated_at: str = ""

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Habit:
        return cls(
            id=str(d.get("id", "")),
            name=str(d.get("name", "")),
            icon=str(d.get("icon", "✓")),
            color=str(d.get("color", "hsl(220, 70%, 50%)")),
            is_archived=bool(d.get("isArchived", False)),
            created_at=str(d.get("createdAt", "")),
            updated_at=str(d.get("updatedAt", "")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "icon": self.icon,
            "color": self.color,
            "isArchived": self.is_archived,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }


@dataclass
class HabitCompletion:
    id: str = ""
    habit_id: str = ""
    completed_date: str = ""  # ISO date
    created_at: str = ""

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> HabitCompletion:
        return cls(
            id=str(d.get("id", "")),
            habit_id=str(d.get("habitId", "")),
            completed_date=str(d.get("completedDate", "")),
            created_at=str(d.get("createdAt", "")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "habitId": self.habit_id,
            "completedDate": self.completed_date,
            "createdAt": self.created_at,
        }


@dataclass
class HabitsFile:
    habits: list[Habit] = field(default_factory=list)
    completions: list[HabitCompletion] = field(default_factory=list)

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> HabitsFile:
        if not d or not isinstance(d, dict):
            return cls()
        return cls(
            habits=[Habit.from_dict(h) for h in (d.get("habits") or []) if isinstance(h, dict)],
            completions=[
                HabitCompletion.from_dict(c) for c in (d.get("completions") or []) if isinstance(c, dict)
            ],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "habits": [h.to_dict() for h in self.habits],
            "completions": [c.to_dict() for c in self.completions],
        }


@dataclass
class HabitWithStreak:
    """Display-only view of a habit merged with its streak statistics."""

    habit: Habit
    current_streak: int = 0
    longest_streak: int = 0
    completed_today: bool = False
    completions: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        d = self.habit.to_dict()
        d.update({
            "currentStreak": self.current_streak,
            "longestStreak": self.longest_streak,
            "completedToday": self.completed_today,
            "completions": self.completions,
        })
        return d


# ── Focus Session ─────────────────────────────────────────────


@dataclass
class FocusSession:
    id: str = ""
    task_id: str | None = None
    start_time: str = ""
    end_time: str | None = None
    duration: float = 0.0  # minutes
    planned_minutes: int = 25
    type: str = "work"  # work, break

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> FocusSession:
        if not d or not isinstance(d, dict):
            return cls()
        return cls(
            id=str(d.get("id", "")),
            task_id=d.get("taskId"),
            start_time=str(d.get("startTime", "")),
            end_time=d.get("endTime"),
            duration=float(d.get("duration", 0.0)),
            planned_minutes=int(d.get("plannedMinutes", 25)),
            type=str(d.get("type", "work")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "taskId": self.task_id,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "duration": self.duration,
            "plannedMinutes": self.planned_minutes,
            "type": self.type,
        }


@dataclass
class FocusState:
    active_session: FocusSession | None = None
    history: list[FocusSession] = field(default_factory=list)

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> FocusState:
        if not d or not isinstance(d, dict):
            return cls()
        active = d.get("activeSession")
        return cls(
            active_session=FocusSession.from_dict(active) if active else None,
            history=[FocusSession.from_dict(s) for s in (d.get("history") or [])],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "activeSession": self.active_session.to_dict() if self.active_session else None,
            "history": [s.to_dict() for s in self.history],
        }


# ── Weekly Reflections ────────────────────────────────────────


@dataclass
class WeeklyReflection:
    id: str = ""
    week_start: str = ""  # ISO date of the Monday
    wins: str = ""
    lessons: str = ""
    notes: str = ""
    created_at: str = ""
    updated_at: str = ""

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> WeeklyReflection:
        return cls(
            id=str(d.get("id", "")),
            week_start=str(d.get("weekStart", "")),
            wins=str(d.get("wins", "") or ""),
            lessons=str(d.get("lessons", "") or ""),
            notes=str(d.get("notes", "") or ""),
            created_at=str(d.get("createdAt", "")),
            updated_at=str(d.get("updatedAt", "")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "weekStart": self.week_start,
            "wins": self.wins,
            "lessons": self.lessons,
            "notes": self.notes,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }


@dataclass
class ReflectionsFile:
    reflections: list[WeeklyReflection] = field(default_factory=list)

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> ReflectionsFile:
        if not d or not isinstance(d, dict):
            return cls()
        return cls(reflections=[
            WeeklyReflection.from_dict(r) for r in (d.get("reflections") or []) if isinstance(r, dict)
        ])

    def to_dict(self) -> dict[str, Any]:
        return {"reflections": [r.to_dict() for r in self.reflections]}
