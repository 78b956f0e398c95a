"""Booking orchestration and the admin appointment operations.

``BookingService.book`` runs one booking attempt end to end:

  1. validate the form data          -> InvalidRequest
  2. normalize date + time to a slot -> InvalidRequest (also for past slots)
  3. list the day's calendar events  -> ProviderFailure
  4. reject overlapping slots        -> SlotUnavailable
  5. create the calendar event       -> ProviderFailure
  6. email the owner                 (failure logged, booking stands)

Steps 3-5 hold a lock for every date the slot touches, so two requests handled
by this process cannot both pass the overlap check for the same time. Nothing
is retried and a created event is never rolled back.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import AsyncExitStack, asynccontextmanager
from datetime import datetime, timedelta
from typing import AsyncIterator, Callable

from bookings.availability import has_overlap
from bookings.calendar_providers.base import CalendarEvent, CalendarProvider
from bookings.config import Settings
from bookings.errors import (
    CancelFailed,
    InvalidRequest,
    ProviderFailure,
    SlotUnavailable,
)
from bookings.event_format import (
    decode_phone,
    decode_summary,
    encode_description,
    encode_summary,
)
from bookings.models import Appointment, BookingConfirmation, BookingRequest
from bookings.notifications import EmailNotifier, booking_message
from bookings.timeparse import day_window, normalize

log = logging.getLogger("bookings.service")


def _dates_touched(start: datetime, end: datetime) -> list[str]:
    """ISO dates covered by the half-open span ``[start, end)``."""
    last = (end - timedelta(microseconds=1)).date()
    day = start.date()
    days = []
    while day <= last:
        days.append(day.isoformat())
        day += timedelta(days=1)
    return days


class BookingService:
    """Book, list and cancel appointments against one calendar."""

    def __init__(
        self,
        provider: CalendarProvider,
        notifier: EmailNotifier,
        settings: Settings,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._provider = provider
        self._notifier = notifier
        self._settings = settings
        self._calendar_id = settings.google_calendar_id
        self._tz = settings.tz
        self._clock = clock or (lambda: datetime.now(tz=self._tz))

        # date -> (lock, number of holders + waiters)
        self._date_locks: dict[str, tuple[asyncio.Lock, int]] = {}

    @asynccontextmanager
    async def _date_lock(self, day: str) -> AsyncIterator[None]:
        lock, users = self._date_locks.get(day, (asyncio.Lock(), 0))
        self._date_locks[day] = (lock, users + 1)
        try:
            async with lock:
                yield
        finally:
            lock, users = self._date_locks[day]
            if users <= 1:
                del self._date_locks[day]
            else:
                self._date_locks[day] = (lock, users - 1)

    @asynccontextmanager
    async def _slot_locks(self, days: list[str]) -> AsyncIterator[None]:
        """Hold the lock of every date in ``days``, taken in sorted order."""
        async with AsyncExitStack() as stack:
            for day in sorted(set(days)):
                await stack.enter_async_context(self._date_lock(day))
            yield

    # ── Booking ────────────────────────────────────────────────

    async def book(self, request: BookingRequest) -> BookingConfirmation:
        log.info(
            "Received booking: %s for %s on %s at %s",
            request.name, request.service, request.date, request.time,
        )
        slot = normalize(
            request.date,
            request.time,
            self._tz,
            self._settings.slot_duration_minutes,
        )
        if slot.start <= self._clock():
            raise InvalidRequest("Cannot book a time slot in the past.")

        day = slot.start.date().isoformat()
        # A late slot can run past midnight into the next date.
        days = _dates_touched(slot.start, slot.end)

        async with self._slot_locks(days):
            day_start, day_end = day_window(day, self._tz)
            time_min = min(day_start, slot.start)
            time_max = max(day_end, slot.end)
            try:
                existing = await self._provider.list_events(
                    self._calendar_id, time_min, time_max
                )
            except Exception as exc:
                log.exception("Could not list events for %s", day)
                raise ProviderFailure.wrap("Booking failed", exc)

            if has_overlap(slot, existing):
                log.info("Slot %s on %s already booked", request.time, day)
                raise SlotUnavailable()

            event = CalendarEvent(
                summary=encode_summary(request.name, request.service),
                description=encode_description(request.phone),
                start=slot.start,
                end=slot.end,
                timezone=self._settings.calendar_timezone,
            )
            try:
                result = await self._provider.create_event(self._calendar_id, event)
            except Exception as exc:
                log.exception("Error adding booking to calendar %s", self._calendar_id)
                raise ProviderFailure.wrap("Booking failed", exc)

        event_id = result["event_id"]
        log.info("Added booking %s to calendar", event_id)

        notified = await self._notify(request, event_id)
        return BookingConfirmation(
            event_id=event_id,
            start_time=slot.start,
            end_time=slot.end,
            notified=notified,
        )

    async def _notify(self, request: BookingRequest, event_id: str) -> bool:
        """Email the owner. Returns whether a message went out."""
        if not self._notifier.configured:
            log.info("Email user not configured, skipping email.")
            return False

        subject, body = booking_message(request)
        try:
            await self._notifier.send(
                self._settings.notification_recipient, subject, body
            )
        except Exception:
            # The calendar event already exists; report the booking as
            # confirmed but unnotified.
            log.exception("Booking %s confirmed but email failed", event_id)
            return False
        return True

    # ── Admin ──────────────────────────────────────────────────

    async def list_appointments(self, date: str | None) -> list[Appointment]:
        if not date or not date.strip():
            raise InvalidRequest("Date query parameter is required (YYYY-MM-DD).")
        time_min, time_max = day_window(date, self._tz)

        try:
            events = await self._provider.list_events(
                self._calendar_id, time_min, time_max
            )
        except Exception as exc:
            log.exception("Fetch appointments error for %s", date)
            raise ProviderFailure.wrap("Failed to fetch appointments.", exc)

        appointments = []
        for event in events:
            name, service = decode_summary(event.summary)
            appointments.append(
                Appointment(
                    id=event.id,
                    summary=event.summary,
                    description=event.description,
                    start_time=event.start,
                    end_time=event.end,
                    name=name,
                    service=service,
                    phone=decode_phone(event.description),
                )
            )
        return appointments

    async def cancel(self, event_id: str | None) -> None:
        if not event_id or not event_id.strip():
            raise InvalidRequest("Event ID is required.")

        try:
            await self._provider.cancel_event(self._calendar_id, event_id)
        except Exception as exc:
            log.exception("Delete error for event %s", event_id)
            raise CancelFailed.wrap("Failed to delete appointment.", exc)
        log.info("Cancelled appointment %s", event_id)
