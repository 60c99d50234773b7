"""Shared record parsing for routine adapters."""

import logging

from cadence.core.routines import Routine, ScheduleItem

logger = logging.getLogger(__name__)


def _label(record) -> str:
    if isinstance(record, dict):
        return str(record.get("id", "?"))
    return repr(record)


def parse_routines(records: list, source: str) -> list[Routine]:
    """Parse routine records, skipping ones that fail with a warning."""
    routines = []
    for record in records or []:
        try:
            routine = Routine.from_api(record)
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"Skipping malformed routine {_label(record)} from {source}: {e!r}")
            continue
        if not routine.is_known_frequency:
            logger.debug(f"Routine {routine.id} has unknown frequency {routine.frequency!r}")
        routines.append(routine)
    logger.debug(f"Loaded {len(routines)} routines from {source}")
    return routines


def parse_schedule(records: list, source: str) -> list[ScheduleItem]:
    """Parse schedule records in display order, skipping malformed ones."""
    items = []
    for record in records or []:
        try:
            items.append(ScheduleItem.from_api(record))
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"Skipping malformed schedule item {_label(record)} from {source}: {e!r}")
    return sorted(items, key=lambda s: s.order_index)
