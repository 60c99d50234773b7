"""File-based routine storage adapter."""

import json
import logging
import os
from pathlib import Path

from cadence.core.routines import Routine, RoutineNotFoundError, ScheduleItem

from .records import parse_routines, parse_schedule

logger = logging.getLogger(__name__)


class JsonRoutineStore:
    """
    JSON file routine storage.

    Implements RoutineRepository protocol. The file holds camelCase records
    under "routines" and "schedule" keys, as exported by the tracker API.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path).expanduser()

    def _read(self) -> dict:
        if not self.path.exists():
            return {"routines": [], "schedule": []}
        return json.loads(self.path.read_text())

    def _write(self, data: dict) -> None:
        """Write atomically via a temp file."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_name(self.path.name + ".tmp")
        tmp.write_text(json.dumps(data, indent=2))
        os.replace(tmp, self.path)

    def fetch_all(self) -> list[Routine]:
        """Fetch all routines, skipping records that fail to parse."""
        return parse_routines(self._read().get("routines", []), str(self.path))

    def fetch_schedule(self) -> list[ScheduleItem]:
        """Fetch schedule items in their stored order."""
        return parse_schedule(self._read().get("schedule", []), str(self.path))

    def save(self, routine: Routine) -> None:
        """Replace the stored record with the same id."""
        data = self._read()
        records = data.get("routines", [])
        for i, record in enumerate(records):
            if isinstance(record, dict) and str(record.get("id")) == routine.id:
                records[i] = {**record, **routine.to_api()}
                break
        else:
            raise RoutineNotFoundError(f"No routine with id {routine.id}")
        data["routines"] = records
        self._write(data)
        logger.debug(f"Saved routine {routine.id} to {self.path}")
