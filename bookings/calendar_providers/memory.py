"""In-process calendar provider.

Used when no Google service account is configured and in tests. Events live
in a dict per calendar id and vanish when the process exits.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime

from .base import CalendarEvent, CalendarProvider, ProviderEvent

logger = logging.getLogger(__name__)


class EventNotFound(LookupError):
    """Raised when deleting an event id the calendar does not hold."""


class InMemoryCalendarProvider(CalendarProvider):
    """CalendarProvider holding events in memory."""

    def __init__(self) -> None:
        self._calendars: dict[str, dict[str, ProviderEvent]] = {}

    def events(self, calendar_id: str = "primary") -> list[ProviderEvent]:
        """All stored events for a calendar, ordered by start time."""
        stored = self._calendars.get(calendar_id, {})
        return sorted(stored.values(), key=lambda e: e.start)

    async def list_events(
        self,
        calendar_id: str,
        time_min: datetime,
        time_max: datetime,
    ) -> list[ProviderEvent]:
        return [
            e for e in self.events(calendar_id)
            if e.start < time_max and e.end > time_min
        ]

    async def create_event(
        self, calendar_id: str, event: CalendarEvent
    ) -> dict:
        event_id = uuid.uuid4().hex
        self._calendars.setdefault(calendar_id, {})[event_id] = ProviderEvent(
            id=event_id,
            summary=event.summary,
            description=event.description,
            start=event.start,
            end=event.end,
        )
        logger.info("Created event %s on in-memory calendar %s", event_id, calendar_id)
        return {"event_id": event_id, "html_link": "", "status": "confirmed"}

    async def cancel_event(
        self, calendar_id: str, event_id: str
    ) -> None:
        stored = self._calendars.get(calendar_id, {})
        if event_id not in stored:
            raise EventNotFound(f"Event {event_id!r} not found")
        del stored[event_id]
        logger.info("Deleted event %s on in-memory calendar %s", event_id, calendar_id)
