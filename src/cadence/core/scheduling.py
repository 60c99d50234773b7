"""Pure recurrence logic - decides which routines occur on which day."""

import math
from collections.abc import Iterable, Mapping
from datetime import date, timedelta
from typing import TypeVar

from .routines import Frequency, Routine, weekday_abbrev

T = TypeVar("T")

QUARTER_START_MONTHS = (1, 4, 7, 10)


def _as_date(d: date) -> date:
    # datetime is a date subclass; drop the time part
    return date(d.year, d.month, d.day)


def week_number(d: date) -> int:
    """
    ISO 8601 week number.

    Shift to the Thursday of the (Monday-started) week, then count weeks
    from January 1st of that Thursday's year.
    """
    d = _as_date(d)
    thursday = d + timedelta(days=3 - d.weekday())
    year_start = date(thursday.year, 1, 1)
    return math.ceil(((thursday - year_start).days + 1) / 7)


def is_scheduled(routine: Routine, target_date: date) -> bool:
    """
    Check whether a routine occurs on the target date.

    Pure function - no I/O. Dates are plain calendar dates; callers pass
    the day already resolved in the user's timezone. Unknown frequencies
    are never scheduled.
    """
    day = weekday_abbrev(target_date)
    day_of_month = target_date.day
    scheduled_days = routine.scheduled_days or []

    match routine.frequency:
        case Frequency.DAILY:
            return True

        case Frequency.WEEKLY:
            if scheduled_days:
                return day in scheduled_days
            return day == "Mon"

        case Frequency.THREE_TIMES_WEEKLY:
            return day in scheduled_days

        case Frequency.BI_WEEKLY:
            anchor = routine.created_at or target_date
            week_diff = abs(week_number(target_date) - week_number(anchor))
            if week_diff % 2 != 0:
                return False
            if scheduled_days:
                return day in scheduled_days
            # No explicit days: weekdays of an active week
            return target_date.weekday() < 5

        case Frequency.MONTHLY:
            if scheduled_days:
                # First occurrence of that weekday in the month
                return day in scheduled_days and day_of_month <= 7
            return day_of_month == 1 or (day == "Mon" and day_of_month <= 7)

        case Frequency.QUARTERLY:
            return target_date.month in QUARTER_START_MONTHS and day_of_month == 1

        case _:
            return False


def get_scheduled_routines(routines: Iterable[Routine], target_date: date) -> list[Routine]:
    """
    Filter to routines scheduled on the target date, keeping input order.

    Pure function - no I/O.
    """
    return [r for r in routines if is_scheduled(r, target_date)]


def _time_of(item) -> str | None:
    if isinstance(item, Mapping):
        return item.get("time")
    return getattr(item, "time", None)


def sort_by_time(items: Iterable[T]) -> list[T]:
    """
    Sort items by their "HH:MM" time, untimed items last.

    Works on objects with a `time` attribute or mappings with a "time" key.
    Stable: untimed items (and equal times) keep their input order.
    """

    def sort_key(item) -> tuple[bool, str]:
        t = _time_of(item)
        return (not t, str(t) if t else "")

    return sorted(items, key=sort_key)


def scheduled_dates(routine: Routine, start: date, end: date) -> list[date]:
    """All dates in [start, end] on which the routine occurs."""
    dates = []
    current = _as_date(start)
    end = _as_date(end)
    while current <= end:
        if is_scheduled(routine, current):
            dates.append(current)
        current += timedelta(days=1)
    return dates
