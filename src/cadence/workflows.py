"""Shared workflow layer between the CLI and library callers.

Each function resolves a repository from config, loads routines, and hands
them to the pure core.
"""

import logging
from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

from .adapters.json_store import JsonRoutineStore
from .adapters.routines_api import RoutinesAPIAdapter
from .config import Config
from .core.agenda import Agenda, assemble_agenda
from .core.routines import Routine, RoutineNotFoundError, toggle_completion
from .core.scheduling import get_scheduled_routines, sort_by_time
from .ports import RoutineRepository

logger = logging.getLogger(__name__)


def get_repository(config: Config) -> RoutineRepository:
    """Resolve the routine repository from config."""
    if config.source == "api":
        return RoutinesAPIAdapter(config=config)
    return JsonRoutineStore(config.routines_path())


def local_now(config: Config) -> datetime:
    """Current time in the configured timezone."""
    return datetime.now(ZoneInfo(config.timezone))


def build_agenda(
    config: Config,
    target_date: date | None = None,
    repo: RoutineRepository | None = None,
    now: datetime | None = None,
) -> Agenda:
    """Load routines and assemble the agenda for a day (default today)."""
    repo = repo or get_repository(config)
    now = now or local_now(config)
    target_date = target_date or now.date()

    # Schedule items are one-offs for the current day only
    schedule = repo.fetch_schedule() if target_date == now.date() else []

    return assemble_agenda(
        repo.fetch_all(),
        target_date,
        schedule=schedule,
        categories=config.categories,
        tz=ZoneInfo(config.timezone),
    )


def week_overview(
    config: Config,
    start: date,
    days: int = 7,
    repo: RoutineRepository | None = None,
) -> list[tuple[date, list[Routine]]]:
    """Routines scheduled on each of the next N days, sorted by time."""
    repo = repo or get_repository(config)
    routines = repo.fetch_all()
    overview = []
    for offset in range(days):
        day = start + timedelta(days=offset)
        overview.append((day, sort_by_time(get_scheduled_routines(routines, day))))
    return overview


def find_routine(repo: RoutineRepository, routine_id: str) -> Routine:
    """Look up a routine by id."""
    for routine in repo.fetch_all():
        if routine.id == routine_id:
            return routine
    raise RoutineNotFoundError(f"No routine with id {routine_id}")


def set_completion(
    config: Config,
    routine_id: str,
    done: bool,
    repo: RoutineRepository | None = None,
    now: datetime | None = None,
) -> Routine:
    """Mark a routine done or not done for today and persist it."""
    repo = repo or get_repository(config)
    now = now or local_now(config)
    routine = find_routine(repo, routine_id)

    updated = toggle_completion(routine, done, now, tz=ZoneInfo(config.timezone))
    if updated is routine:
        logger.info(f"Routine {routine_id} already {'done' if done else 'open'} for {now.date()}")
        return routine

    repo.save(updated)
    logger.info(f"Routine {routine_id} marked {'done' if done else 'open'} for {now.date()}")
    return updated


def unknown_frequencies(config: Config, repo: RoutineRepository | None = None) -> list[Routine]:
    """Routines whose frequency the scheduler does not recognize."""
    repo = repo or get_repository(config)
    return [r for r in repo.fetch_all() if not r.is_known_frequency]
