"""Shared fixtures: settings without .env, an in-memory calendar, a fake mailer
and a fixed clock so booking dates in the tests stay in the future."""

from datetime import datetime
from zoneinfo import ZoneInfo

import pytest

from bookings.calendar_providers.memory import InMemoryCalendarProvider
from bookings.config import Settings
from bookings.service import BookingService

NOW = datetime(2025, 5, 1, 9, 0, tzinfo=ZoneInfo("Asia/Kolkata"))


class FakeNotifier:
    """Records messages instead of talking to SMTP."""

    def __init__(self, configured=True, error=None):
        self.configured = configured
        self.error = error
        self.sent = []

    async def send(self, to, subject, body):
        if self.error is not None:
            raise self.error
        self.sent.append((to, subject, body))


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        google_service_account_json="",
        google_calendar_id="primary",
        calendar_timezone="Asia/Kolkata",
        email_user="salon@example.com",
        email_pass="secret",
        owner_email="owner@example.com",
    )


@pytest.fixture
def clock():
    return lambda: NOW


@pytest.fixture
def provider():
    return InMemoryCalendarProvider()


@pytest.fixture
def make_notifier():
    """Factory for FakeNotifier, e.g. ``make_notifier(error=OSError())``."""
    return FakeNotifier


@pytest.fixture
def notifier(make_notifier):
    return make_notifier()


@pytest.fixture
def make_service(provider, notifier, settings, clock):
    """Factory for BookingService; defaults to the shared fixtures."""
    def _make(provider=provider, notifier=notifier, clock=clock):
        return BookingService(
            provider=provider, notifier=notifier, settings=settings, clock=clock
        )
    return _make


@pytest.fixture
def service(make_service):
    return make_service()
