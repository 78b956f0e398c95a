"""FastAPI application — HTTP endpoints for appointment booking.

Endpoints:

  POST   /api/book                 Public booking form submission
  GET    /api/appointments?date=   Admin: list a day's appointments
  DELETE /api/appointments/{id}    Admin: cancel an appointment
  GET    /health                   Health check

Domain errors (``bookings.errors``) are turned into JSON responses by a
single exception handler: ``{"message": ...}`` plus ``"error"`` carrying the
underlying provider error text on 500s.
"""

from __future__ import annotations

# Load .env into os.environ early so every Settings() sees the same values.
from dotenv import load_dotenv
load_dotenv()

import json
import logging
import time
from datetime import datetime
from typing import Callable

# Configure root logger early so all app loggers have a handler and are
# visible when run via `uvicorn bookings.app:app`.
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(name)-20s %(levelname)-7s %(message)s",
)

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from bookings.calendar_providers import CalendarProvider, InMemoryCalendarProvider
from bookings.config import Settings, settings as default_settings
from bookings.errors import BookingError
from bookings.models import BookingRequest
from bookings.notifications import EmailNotifier
from bookings.service import BookingService

log = logging.getLogger("bookings.app")

_START_TIME = time.time()


def _build_provider(settings: Settings) -> CalendarProvider:
    if not settings.google_configured:
        log.warning("No Google service account configured; using in-memory calendar")
        return InMemoryCalendarProvider()

    from bookings.calendar_providers.google import GoogleCalendarProvider

    return GoogleCalendarProvider(
        service_account_path=settings.google_service_account_json,
        timezone_name=settings.calendar_timezone,
    )


def create_app(
    settings: Settings | None = None,
    provider: CalendarProvider | None = None,
    notifier: EmailNotifier | None = None,
    clock: Callable[[], datetime] | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = settings or default_settings
    for warning in settings.validate_startup():
        log.warning(warning)

    service = BookingService(
        provider=provider or _build_provider(settings),
        notifier=notifier or EmailNotifier.from_settings(settings),
        settings=settings,
        clock=clock,
    )

    app = FastAPI(
        title="Appointment Booking",
        description="Book, list and cancel appointments on a shared calendar",
        version="0.1.0",
    )
    app.state.service = service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(BookingError)
    async def booking_error_handler(request: Request, exc: BookingError) -> JSONResponse:
        if exc.status_code >= 500:
            log.error("%s %s failed: %s (%s)", request.method, request.url.path, exc.message, exc.detail)
        return JSONResponse(exc.to_dict(), status_code=exc.status_code)

    # ── Health check ───────────────────────────────────────────

    @app.get("/health")
    async def health() -> JSONResponse:
        uptime = round(time.time() - _START_TIME, 1)
        return JSONResponse({"status": "ok", "uptime": uptime})

    # ── Booking ────────────────────────────────────────────────

    @app.post("/api/book")
    async def book(request: Request) -> JSONResponse:
        """Validate the form data, check the slot and create the booking.

        The body is read by hand so an empty or non-JSON body is reported
        as missing fields (400) rather than a schema error.
        """
        try:
            payload = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            payload = {}

        booking = BookingRequest.from_payload(payload)
        confirmation = await service.book(booking)
        return JSONResponse(confirmation.model_dump(mode="json", by_alias=True))

    # ── Admin ──────────────────────────────────────────────────

    @app.get("/api/appointments")
    async def list_appointments(date: str | None = None) -> JSONResponse:
        appointments = await service.list_appointments(date)
        return JSONResponse(
            [a.model_dump(mode="json", by_alias=True) for a in appointments]
        )

    @app.delete("/api/appointments")
    async def cancel_without_id() -> JSONResponse:
        await service.cancel(None)
        return JSONResponse({"message": "Appointment deleted successfully."})

    @app.delete("/api/appointments/{event_id}")
    async def cancel_appointment(event_id: str) -> JSONResponse:
        await service.cancel(event_id)
        return JSONResponse({"message": "Appointment deleted successfully."})

    return app


# ── Module-level app instance for uvicorn ──────────────────────

app = create_app()


if __name__ == "__main__":
    import uvicorn

    log_config = uvicorn.config.LOGGING_CONFIG
    log_config["formatters"]["default"]["fmt"] = (
        "%(asctime)s %(name)-12s %(levelname)-8s %(message)s"
    )

    uvicorn.run(
        "bookings.app:app",
        host=default_settings.host,
        port=default_settings.port,
        reload=default_settings.debug,
        log_config=log_config,
    )
