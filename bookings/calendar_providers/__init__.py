"""Calendar provider abstractions and implementations."""

from .base import CalendarEvent, CalendarProvider, Interval, ProviderEvent
from .memory import InMemoryCalendarProvider

__all__ = [
    "CalendarProvider",
    "CalendarEvent",
    "InMemoryCalendarProvider",
    "Interval",
    "ProviderEvent",
]
