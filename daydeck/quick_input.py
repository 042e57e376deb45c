"""Quick-add parsing: classify one free-text line as a note or a task.

The line goes through a fixed pipeline of pure transforms. Each stage takes
the remaining text and returns ``(extracted_value, new_remaining_text)``:

    type indicator -> #tags -> priority keyword -> trailing '!' ->
    date keyword -> explicit date -> whitespace cleanup -> note inference

Stage order is observable (a trailing '!' overrides a priority keyword, a
date always forces a task) and must not be rearranged.
"""

from __future__ import annotations

import logging
import re
from datetime import date, datetime, timedelta

from daydeck.models import ParsedInput

logger = logging.getLogger(__name__)


NOTE_INDICATORS = ("note:", "memo:", "#note", "remember:")
TASK_INDICATORS = ("todo:", "task:", "do:", "[]", "[ ]")

PRIORITY_KEYWORDS = {
    "low": "low",
    "medium": "medium",
    "high": "high",
    "urgent": "high",
    "important": "high",
    "!": "high",
    "!!": "high",
    "!!!": "high",
}

TRAILING_BANGS = (("!!!", "high"), ("!!", "high"), ("!", "medium"))

WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")
DATE_KEYWORDS = ("today", "tomorrow") + WEEKDAYS

MONTHS = {
    "jan": 1, "feb": 2, "mar": 3, "apr": 4, "may": 5, "jun": 6,
    "jul": 7, "aug": 8, "sep": 9, "oct": 10, "nov": 11, "dec": 12,
}

ACTION_VERBS = frozenset({
    "buy", "get", "call", "email", "send", "finish", "complete", "submit",
    "meet", "review", "check", "fix", "update", "create", "make", "do", "schedule",
})

NOTE_MIN_LENGTH = 50

_TAG_RE = re.compile(r"#(\w+)")
_DATE_KEYWORD_RES = [(kw, re.compile(rf"\b{kw}\b", re.IGNORECASE)) for kw in DATE_KEYWORDS]
_NUMERIC_DATE_RE = re.compile(r"\b(\d{1,2})[/\-](\d{1,2})\b")
_MONTH_DATE_RE = re.compile(r"\b(" + "|".join(MONTHS) + r")\s+(\d{1,2})\b", re.IGNORECASE)


def _cut(text: str, match: re.Match[str]) -> str:
    return (text[: match.start()] + text[match.end():]).strip()


def _safe_date(year: int, month: int, day: int) -> date | None:
    try:
        return date(year, month, day)
    except ValueError:
        return None


def _next_weekday(day: date, weekday: int) -> date:
    """First date strictly after *day* falling on *weekday* (Monday=0)."""
    delta = (weekday - day.weekday()) % 7 or 7
    return day + timedelta(days=delta)


# ── Pipeline stages ───────────────────────────────────────────


def strip_indicator(text: str, indicators: tuple[str, ...]) -> tuple[bool, str]:
    """Strip the first case-insensitive prefix from *indicators*."""
    lowered = text.lower()
    for indicator in indicators:
        if lowered.startswith(indicator):
            return True, text[len(indicator):].strip()
    return False, text


def extract_tags(text: str) -> tuple[list[str], str]:
    """Collect every #word (lowercased, in order) and remove them from the text."""
    tags = [m.group(1).lower() for m in _TAG_RE.finditer(text)]
    if not tags:
        return [], text
    return tags, _TAG_RE.sub("", text).strip()


def extract_priority_keyword(text: str) -> tuple[str | None, str]:
    """Remove the first whitespace token that is a priority keyword."""
    tokens = text.split()
    for i, token in enumerate(tokens):
        priority = PRIORITY_KEYWORDS.get(token.lower())
        if priority:
            return priority, " ".join(tokens[:i] + tokens[i + 1:])
    return None, text


def extract_trailing_bangs(text: str) -> tuple[str | None, str]:
    for suffix, priority in TRAILING_BANGS:
        if text.endswith(suffix):
            return priority, text[: -len(suffix)].strip()
    return None, text


def resolve_date_keyword(keyword: str, now: datetime, weekday_resolution: str = "anchored") -> date:
    """Map a date keyword to a calendar date relative to *now*.

    With ``anchored`` resolution, monday..thursday count 0-3 days from the
    next Monday and friday..sunday count 0-2 days from the next Friday (so
    "tuesday" said on a Monday lands eight days out). ``next`` resolution
    picks the next occurrence of that weekday strictly after today.
    """
    today = now.date()
    keyword = keyword.lower()
    if keyword == "today":
        return today
    if keyword == "tomorrow":
        return today + timedelta(days=1)

    target = WEEKDAYS.index(keyword)
    if weekday_resolution == "next":
        return _next_weekday(today, target)
    if target <= 3:
        return _next_weekday(today, 0) + timedelta(days=target)
    return _next_weekday(today, 4) + timedelta(days=target - 4)


def extract_date_keyword(
    text: str, now: datetime, weekday_resolution: str = "anchored"
) -> tuple[str | None, str]:
    for keyword, pattern in _DATE_KEYWORD_RES:
        m = pattern.search(text)
        if m:
            due = resolve_date_keyword(keyword, now, weekday_resolution)
            return due.isoformat(), _cut(text, m)
    return None, text


def extract_explicit_date(text: str, now: datetime) -> tuple[str | None, str]:
    """Extract 'D/M', 'D-M' or 'Mon D' in the current year; invalid dates are left as text."""
    m = _NUMERIC_DATE_RE.search(text)
    if m:
        due = _safe_date(now.year, int(m.group(2)), int(m.group(1)))
        if due is not None:
            return due.isoformat(), _cut(text, m)
        logger.debug("Ignoring invalid numeric date %r", m.group(0))

    m = _MONTH_DATE_RE.search(text)
    if m:
        due = _safe_date(now.year, MONTHS[m.group(1).lower()], int(m.group(2)))
        if due is not None:
            return due.isoformat(), _cut(text, m)
        logger.debug("Ignoring invalid month date %r", m.group(0))

    return None, text


def looks_like_note(title: str, due_date: str | None, priority: str | None) -> bool:
    """Long, undated, unprioritised text not led by an action verb reads as a note."""
    if due_date or priority or len(title) <= NOTE_MIN_LENGTH:
        return False
    first_word = title.split(" ")[0].lower()
    return first_word not in ACTION_VERBS


# ── Entry point ───────────────────────────────────────────────


def parse_quick_input(
    text: str,
    now: datetime | None = None,
    weekday_resolution: str = "anchored",
) -> ParsedInput:
    """Parse a quick-add line into a ParsedInput. Total: never raises."""
    if now is None:
        now = datetime.now()

    remaining = (text or "").strip()
    kind = "task"

    matched, remaining = strip_indicator(remaining, NOTE_INDICATORS)
    if matched:
        kind = "note"
    matched, remaining = strip_indicator(remaining, TASK_INDICATORS)
    if matched:
        kind = "task"

    tags, remaining = extract_tags(remaining)

    priority, remaining = extract_priority_keyword(remaining)
    bang_priority, remaining = extract_trailing_bangs(remaining)
    if bang_priority:
        priority = bang_priority

    due_date, remaining = extract_date_keyword(remaining, now, weekday_resolution)
    if due_date is None:
        due_date, remaining = extract_explicit_date(remaining, now)
    if due_date is not None:
        kind = "task"

    title = " ".join(remaining.split())

    if looks_like_note(title, due_date, priority):
        kind = "note"

    parsed = ParsedInput(type=kind, title=title, due_date=due_date, priority=priority, tags=tags)
    logger.debug("Parsed quick input %r -> %s", text, parsed)
    return parsed
