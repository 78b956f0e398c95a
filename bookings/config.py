"""Application configuration via environment variables."""

from __future__ import annotations

import logging
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic_settings import BaseSettings

log = logging.getLogger("bookings.config")


# .env.example values that mean "not configured"
PLACEHOLDERS = frozenset({"path/to/service-account.json", "you@gmail.com"})


class Settings(BaseSettings):
    # Google Calendar
    google_service_account_json: str = ""
    google_calendar_id: str = "primary"
    calendar_timezone: str = "Asia/Kolkata"
    slot_duration_minutes: int = 60

    # Email notifications (SMTP)
    email_user: str = ""
    email_pass: str = ""
    owner_email: str = ""
    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 465

    # Server
    host: str = "127.0.0.1"
    port: int = 3000
    debug: bool = False

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @property
    def tz(self) -> ZoneInfo:
        return ZoneInfo(self.calendar_timezone)

    @property
    def google_configured(self) -> bool:
        value = self.google_service_account_json.strip()
        return bool(value) and value not in PLACEHOLDERS

    @property
    def email_configured(self) -> bool:
        value = self.email_user.strip()
        return bool(value) and value not in PLACEHOLDERS

    @property
    def notification_recipient(self) -> str:
        return self.owner_email or self.email_user

    def validate_startup(self) -> list[str]:
        """Validate configuration at startup. Returns warnings, raises on errors."""
        warnings: list[str] = []

        try:
            ZoneInfo(self.calendar_timezone)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(
                f"CALENDAR_TIMEZONE {self.calendar_timezone!r} is not a valid "
                "IANA time zone name."
            )

        if self.slot_duration_minutes <= 0:
            raise ValueError("SLOT_DURATION_MINUTES must be positive.")

        # Google Calendar — bookings are kept in memory without it
        if not self.google_configured:
            warnings.append(
                "GOOGLE_SERVICE_ACCOUNT_JSON not set — bookings are stored in "
                "memory and lost on restart."
            )

        # Email — notifications are skipped without it
        if not self.email_configured:
            warnings.append("EMAIL_USER not set — booking emails are skipped.")
        elif not self.email_pass:
            warnings.append(
                "EMAIL_PASS not set — SMTP login will fail for %s." % self.email_user
            )

        return warnings


settings = Settings()
