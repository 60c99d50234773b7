"""Ports - interfaces/protocols for external dependencies."""

from .routine_repo import RoutineRepository

__all__ = [
    "RoutineRepository",
]
