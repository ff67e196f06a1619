"""Core data models for vslog."""

from .event import MAX_ID, Event, Kind, Severity

__all__ = [
    "Event",
    "Kind",
    "Severity",
    "MAX_ID",
]
