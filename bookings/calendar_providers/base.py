"""Abstract base class for calendar providers.

Defines the interface for listing, creating and deleting events.
Any calendar backend (Google, in-memory, etc.) implements this ABC.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Interval:
    """A half-open ``[start, end)`` window of time."""

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        if self.end <= self.start:
            raise ValueError(
                f"Interval end {self.end.isoformat()} must be after "
                f"start {self.start.isoformat()}"
            )


@dataclass
class CalendarEvent:
    """Represents a calendar event to be created."""

    summary: str
    start: datetime
    end: datetime
    description: str = ""
    timezone: str = ""  # IANA name sent alongside start/end


@dataclass
class ProviderEvent:
    """An event as stored by the provider."""

    id: str
    summary: str
    start: datetime
    end: datetime
    description: str = ""


class CalendarProvider(ABC):
    """Abstract calendar backend.

    Subclasses must implement event listing, creation and deletion.
    Failures propagate as exceptions; callers decide how to report them.
    """

    @abstractmethod
    async def list_events(
        self,
        calendar_id: str,
        time_min: datetime,
        time_max: datetime,
    ) -> list[ProviderEvent]:
        """Return single (expanded) events overlapping ``[time_min, time_max)``.

        Args:
            calendar_id: The calendar to query.
            time_min: Beginning of the window.
            time_max: End of the window.

        Returns:
            Events ordered by start time.
        """

    @abstractmethod
    async def create_event(
        self, calendar_id: str, event: CalendarEvent
    ) -> dict:
        """Create a calendar event.

        Args:
            calendar_id: The calendar to create the event on.
            event: Event details.

        Returns:
            Dict containing at least ``"event_id"`` and ``"html_link"``.
        """

    @abstractmethod
    async def cancel_event(
        self, calendar_id: str, event_id: str
    ) -> None:
        """Delete a calendar event.

        Args:
            calendar_id: The calendar that owns the event.
            event_id: Provider-specific event identifier.

        Raises whatever the backend raises when the event cannot be deleted.
        """
