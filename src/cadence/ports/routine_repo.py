"""Routine repository interface."""

from typing import Protocol

from cadence.core.routines import Routine, ScheduleItem


class RoutineRepository(Protocol):
    """Interface for loading and saving routines from any backend."""

    def fetch_all(self) -> list[Routine]:
        """Fetch all routines."""
        ...

    def fetch_schedule(self) -> list[ScheduleItem]:
        """Fetch today's one-off schedule items."""
        ...

    def save(self, routine: Routine) -> None:
        """Persist an updated routine."""
        ...
