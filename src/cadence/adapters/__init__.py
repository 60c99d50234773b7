"""Adapters - I/O implementations of ports."""

from .json_store import JsonRoutineStore
from .routines_api import RoutinesAPIAdapter, AuthenticationError

__all__ = [
    "JsonRoutineStore",
    "RoutinesAPIAdapter",
    "AuthenticationError",
]
