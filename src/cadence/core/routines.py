"""Pure routine domain logic - no I/O dependencies."""

from dataclasses import dataclass, field, replace
from datetime import date, datetime, tzinfo
from enum import Enum

WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


class Frequency(str, Enum):
    """Known routine frequencies."""

    DAILY = "Daily"
    WEEKLY = "Weekly"
    THREE_TIMES_WEEKLY = "3x Weekly"
    BI_WEEKLY = "Bi-weekly"
    MONTHLY = "Monthly"
    QUARTERLY = "Quarterly"


class UnknownFrequencyError(ValueError):
    """Raised when a frequency is not one of the known values."""

    pass


class NotScheduledError(Exception):
    """Raised when completing a routine on a day it does not occur."""

    pass


class RoutineNotFoundError(Exception):
    """Raised when a routine id does not exist in the repository."""

    pass


def _parse_date(value) -> date | None:
    """Calendar date of a date, datetime, or ISO string."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value).split("T")[0])


def _parse_time(value) -> str | None:
    """Time as a string ("HH:MM"), or None for anytime. Not validated."""
    if value is None or value == "":
        return None
    return str(value)


def _parse_datetime(value) -> datetime | None:
    if not value:
        return None
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))


@dataclass
class Routine:
    """A recurring routine with a frequency rule."""

    id: str
    title: str
    frequency: str
    time: str | None = None
    scheduled_days: list[str] | None = field(default_factory=list)
    category: str = ""
    completed: bool = False
    streak: int = 0
    measure_of_success: str | None = None
    created_at: date | None = None
    completion_history: list[str] = field(default_factory=list)
    last_completed: datetime | None = None

    @property
    def is_known_frequency(self) -> bool:
        return self.frequency in {f.value for f in Frequency}

    @classmethod
    def from_api(cls, data: dict) -> "Routine":
        """Create Routine from a tracker API record (camelCase keys)."""
        return cls(
            id=str(data["id"]),
            title=data["title"],
            frequency=data["frequency"],
            time=_parse_time(data.get("time")),
            scheduled_days=list(data.get("scheduledDays") or []),
            category=data.get("category", "") or "",
            completed=bool(data.get("completed", False)),
            streak=data.get("streak", 0) or 0,
            measure_of_success=data.get("measureOfSuccess"),
            created_at=_parse_date(data.get("createdAt")),
            completion_history=list(data.get("completionHistory") or []),
            last_completed=_parse_datetime(data.get("lastCompleted")),
        )

    def to_api(self) -> dict:
        """Serialize back to the tracker's camelCase shape."""
        return {
            "id": self.id,
            "title": self.title,
            "frequency": self.frequency,
            "time": self.time,
            "scheduledDays": list(self.scheduled_days or []),
            "category": self.category,
            "completed": self.completed,
            "streak": self.streak,
            "measureOfSuccess": self.measure_of_success,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "completionHistory": list(self.completion_history),
            "lastCompleted": self.last_completed.isoformat() if self.last_completed else None,
        }


@dataclass
class ScheduleItem:
    """A one-off timed block on today's schedule."""

    id: str
    time: str
    activity: str
    type: str
    order_index: int = 0

    @classmethod
    def from_api(cls, data: dict) -> "ScheduleItem":
        return cls(
            id=str(data["id"]),
            time=str(data["time"]),
            activity=data["activity"],
            type=data.get("type", "") or "",
            order_index=int(data.get("orderIndex", 0) or 0),
        )

    def to_api(self) -> dict:
        return {
            "id": self.id,
            "time": self.time,
            "activity": self.activity,
            "type": self.type,
            "orderIndex": self.order_index,
        }


def weekday_abbrev(d: date) -> str:
    """Three-letter weekday name (Mon..Sun)."""
    return WEEKDAYS[d.weekday()]


def validate_frequency(value: str) -> Frequency:
    """
    Strictly resolve a frequency string.

    The scheduler treats unknown frequencies as never scheduled; use this
    at entry points that should reject them instead.
    """
    try:
        return Frequency(value)
    except ValueError:
        raise UnknownFrequencyError(f"Unknown frequency: {value!r}") from None


def _entry_is_for_day(entry: str, day: date, tz: tzinfo | None) -> bool:
    key = day.isoformat()
    if entry.startswith(key):
        return True
    if "T" not in entry:
        return False
    try:
        stamp = datetime.fromisoformat(entry)
    except ValueError:
        return False
    if tz is not None and stamp.tzinfo is not None:
        stamp = stamp.astimezone(tz)
    return stamp.date() == day


def was_completed_on(routine: Routine, day: date, tz: tzinfo | None = None) -> bool:
    """Check the completion history for an entry on the given day."""
    return any(_entry_is_for_day(e, day, tz) for e in routine.completion_history)


def toggle_completion(
    routine: Routine,
    done: bool,
    now: datetime,
    tz: tzinfo | None = None,
) -> Routine:
    """
    Mark a routine done (or not done) for now's date.

    Returns a new Routine; the input is left untouched.
    Raises NotScheduledError if the routine does not occur that day.
    """
    from .scheduling import is_scheduled

    today = now.date()
    if not is_scheduled(routine, today):
        raise NotScheduledError(f"'{routine.title}' is not scheduled for {today.isoformat()}")

    if was_completed_on(routine, today, tz) == done:
        return routine

    if done:
        return replace(
            routine,
            completed=True,
            streak=routine.streak + 1,
            last_completed=now,
            completion_history=[*routine.completion_history, today.isoformat()],
        )

    return replace(
        routine,
        completed=False,
        streak=max(0, routine.streak - 1),
        completion_history=[
            e for e in routine.completion_history if not _entry_is_for_day(e, today, tz)
        ],
    )
