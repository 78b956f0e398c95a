"""Google Calendar provider implementation.

Uses a Google Cloud service account to interact with the Calendar API v3.
The service account JSON key path comes from ``Settings.google_service_account_json``;
the calendar must be shared with the service account's email address.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from functools import partial
from typing import Any
from zoneinfo import ZoneInfo

from google.oauth2.service_account import Credentials
from googleapiclient.discovery import build

from .base import CalendarEvent, CalendarProvider, ProviderEvent

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/calendar"]


class GoogleCalendarProvider(CalendarProvider):
    """CalendarProvider backed by Google Calendar API v3."""

    def __init__(
        self,
        service_account_path: str,
        timezone_name: str = "UTC",
    ) -> None:
        if not service_account_path:
            raise ValueError(
                "Google service account JSON path must be provided "
                "(GOOGLE_SERVICE_ACCOUNT_JSON)."
            )
        self._tz = ZoneInfo(timezone_name)
        self._credentials = Credentials.from_service_account_file(
            service_account_path, scopes=SCOPES
        )
        self._service = build(
            "calendar", "v3", credentials=self._credentials
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _run_in_executor(self, func, *args, **kwargs) -> Any:
        """Run a synchronous Google API call in the default thread pool."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            None, partial(func, *args, **kwargs)
        )

    @staticmethod
    def _to_rfc3339(dt: datetime) -> str:
        """Convert a datetime to an RFC 3339 string with timezone."""
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return dt.isoformat()

    def _parse_when(self, when: dict) -> datetime:
        """Parse an event ``start``/``end`` object.

        Timed events carry ``dateTime``; all-day events only carry ``date``,
        which is taken as midnight in the provider's time zone.
        """
        if "dateTime" in when:
            dt = datetime.fromisoformat(when["dateTime"])
            if dt.tzinfo is None:
                dt = dt.replace(tzinfo=self._tz)
            return dt
        return datetime.fromisoformat(when["date"]).replace(tzinfo=self._tz)

    def _to_provider_event(self, item: dict) -> ProviderEvent:
        return ProviderEvent(
            id=item["id"],
            summary=item.get("summary", ""),
            description=item.get("description", ""),
            start=self._parse_when(item["start"]),
            end=self._parse_when(item["end"]),
        )

    # ------------------------------------------------------------------
    # CalendarProvider interface
    # ------------------------------------------------------------------

    async def list_events(
        self,
        calendar_id: str,
        time_min: datetime,
        time_max: datetime,
    ) -> list[ProviderEvent]:
        """List single events in the window, ordered by start time.

        Recurring events are expanded into their instances
        (``singleEvents=True``), which ``orderBy=startTime`` requires.
        Follows ``nextPageToken`` until the window is exhausted.
        """
        items: list[dict] = []
        page_token: str | None = None

        while True:
            request = self._service.events().list(
                calendarId=calendar_id,
                timeMin=self._to_rfc3339(time_min),
                timeMax=self._to_rfc3339(time_max),
                singleEvents=True,
                orderBy="startTime",
                pageToken=page_token,
            )
            response = await self._run_in_executor(request.execute)
            items.extend(response.get("items", []))
            page_token = response.get("nextPageToken")
            if not page_token:
                break

        logger.debug(
            "Listed %d events on calendar %s between %s and %s",
            len(items), calendar_id, time_min.isoformat(), time_max.isoformat(),
        )
        return [self._to_provider_event(item) for item in items]

    async def create_event(
        self, calendar_id: str, event: CalendarEvent
    ) -> dict:
        """Insert an event into the Google Calendar."""
        start: dict[str, str] = {"dateTime": self._to_rfc3339(event.start)}
        end: dict[str, str] = {"dateTime": self._to_rfc3339(event.end)}
        if event.timezone:
            start["timeZone"] = event.timezone
            end["timeZone"] = event.timezone

        body: dict[str, Any] = {
            "summary": event.summary,
            "start": start,
            "end": end,
        }
        if event.description:
            body["description"] = event.description

        result = await self._run_in_executor(
            self._service.events()
            .insert(calendarId=calendar_id, body=body)
            .execute
        )

        logger.info("Created event %s on calendar %s", result["id"], calendar_id)

        return {
            "event_id": result["id"],
            "html_link": result.get("htmlLink", ""),
            "status": result.get("status", "confirmed"),
        }

    async def cancel_event(
        self, calendar_id: str, event_id: str
    ) -> None:
        """Delete an event from Google Calendar.

        A missing event surfaces as ``googleapiclient.errors.HttpError``
        (404/410) like any other API failure.
        """
        await self._run_in_executor(
            self._service.events()
            .delete(calendarId=calendar_id, eventId=event_id)
            .execute
        )
        logger.info("Deleted event %s on calendar %s", event_id, calendar_id)
