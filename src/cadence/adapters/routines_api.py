"""Tracker API adapter - HTTP client for routine fetching."""

import logging

import requests

from cadence.config import Config, load_config
from cadence.core.routines import Routine, RoutineNotFoundError, ScheduleItem

from .records import parse_routines, parse_schedule

logger = logging.getLogger(__name__)

# Fields written back when a completion is toggled
COMPLETION_FIELDS = ("completed", "streak", "lastCompleted", "completionHistory")


class AuthenticationError(Exception):
    """Raised when authentication fails."""

    pass


class RoutinesAPIAdapter:
    """
    Tracker REST API adapter.

    Implements RoutineRepository protocol. Handles auth headers and API
    calls. No business logic - just I/O.
    """

    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
        config: Config | None = None,
        session: requests.Session | None = None,
    ):
        if base_url is None or token is None:
            config = config or load_config()
        self.base_url = (base_url if base_url is not None else config.api_base_url).rstrip("/")
        self.token = token if token is not None else config.api_token
        self._session = session or requests.Session()

    def _headers(self) -> dict[str, str]:
        if not self.token:
            raise AuthenticationError("No API token. Set API_TOKEN in cadence.conf.")
        return {"Authorization": f"Bearer {self.token}"}

    def _check(self, resp: requests.Response) -> None:
        if resp.status_code in (401, 403):
            raise AuthenticationError(f"API rejected credentials ({resp.status_code})")
        resp.raise_for_status()

    def _api_request(self, endpoint: str) -> dict | list:
        """Make authenticated GET request."""
        resp = self._session.get(f"{self.base_url}{endpoint}", headers=self._headers())
        self._check(resp)
        return resp.json()

    def fetch_all(self) -> list[Routine]:
        """Fetch all routines for the authenticated user."""
        return parse_routines(self._api_request("/api/routines"), self.base_url)

    def fetch_schedule(self) -> list[ScheduleItem]:
        """Fetch schedule items in display order."""
        return parse_schedule(self._api_request("/api/schedule"), self.base_url)

    def save(self, routine: Routine) -> None:
        """PATCH the completion fields of a routine."""
        payload = {k: v for k, v in routine.to_api().items() if k in COMPLETION_FIELDS}
        resp = self._session.patch(
            f"{self.base_url}/api/routines/{routine.id}",
            json=payload,
            headers=self._headers(),
        )
        if resp.status_code == 404:
            raise RoutineNotFoundError(f"No routine with id {routine.id}")
        self._check(resp)
        logger.debug(f"Patched routine {routine.id} at {self.base_url}")
