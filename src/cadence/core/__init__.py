"""Functional core - pure business logic with no I/O."""

from .routines import (
    WEEKDAYS,
    Frequency,
    NotScheduledError,
    Routine,
    RoutineNotFoundError,
    ScheduleItem,
    UnknownFrequencyError,
    toggle_completion,
    validate_frequency,
    was_completed_on,
)
from .scheduling import (
    get_scheduled_routines,
    is_scheduled,
    scheduled_dates,
    sort_by_time,
    week_number,
)
from .agenda import Agenda, AgendaItem, assemble_agenda, format_agenda

__all__ = [
    # Routines
    "WEEKDAYS",
    "Frequency",
    "Routine",
    "ScheduleItem",
    "NotScheduledError",
    "RoutineNotFoundError",
    "UnknownFrequencyError",
    "toggle_completion",
    "validate_frequency",
    "was_completed_on",
    # Scheduling
    "week_number",
    "is_scheduled",
    "get_scheduled_routines",
    "sort_by_time",
    "scheduled_dates",
    # Agenda
    "Agenda",
    "AgendaItem",
    "assemble_agenda",
    "format_agenda",
]
