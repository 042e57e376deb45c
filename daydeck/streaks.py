"""Habit streak computation.

Streaks are counted over calendar days. Every completion is normalized to a
plain ``date`` before comparison: ISO strings are parsed, datetimes are
truncated to their day (aware datetimes are first converted into *tz* when
one is given). Entries that cannot be read as a date are skipped.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta, tzinfo
from typing import Iterable, Union

from daydeck.models import StreakResult

logger = logging.getLogger(__name__)

DateLike = Union[str, date, datetime]


def to_calendar_day(value: DateLike, tz: tzinfo | None = None) -> date | None:
    """Normalize a completion entry to its calendar day, or None if unreadable."""
    if isinstance(value, datetime):
        if tz is not None and value.tzinfo is not None:
            value = value.astimezone(tz)
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return date.fromisoformat(text[:10])
        except ValueError:
            return None
    return None


def normalize_days(completions: Iterable[DateLike], tz: tzinfo | None = None) -> set[date]:
    days = set()
    for value in completions:
        day = to_calendar_day(value, tz)
        if day is None:
            logger.debug("Skipping unreadable completion date %r", value)
            continue
        days.add(day)
    return days


def longest_run(days: Iterable[date]) -> int:
    """Length of the longest run of consecutive calendar days."""
    longest = 0
    run = 0
    previous: date | None = None
    for day in sorted(days):
        if previous is not None and day - previous == timedelta(days=1):
            run += 1
        else:
            run = 1
        longest = max(longest, run)
        previous = day
    return longest


def current_run(days: set[date], today: date) -> int:
    """Consecutive days ending today, or ending yesterday if today is not logged yet."""
    yesterday = today - timedelta(days=1)
    if today in days:
        cursor = today
    elif yesterday in days:
        cursor = yesterday
    else:
        return 0

    current = 0
    while cursor in days:
        current += 1
        cursor -= timedelta(days=1)
    return current


def compute_streak(
    completions: Iterable[DateLike],
    today: DateLike | None = None,
    tz: tzinfo | None = None,
) -> StreakResult:
    """Compute current and longest streaks for one habit's completion dates."""
    days = normalize_days(completions, tz)
    if not days:
        return StreakResult(0, 0)

    if today is None:
        today_day = datetime.now(tz).date() if tz is not None else date.today()
    else:
        today_day = to_calendar_day(today, tz) or date.today()

    return StreakResult(current=current_run(days, today_day), longest=longest_run(days))
