"""Owner email notifications over SMTP.

Sending is skipped entirely when no ``EMAIL_USER`` is configured.
"""

from __future__ import annotations

import asyncio
import logging
import smtplib
import ssl
from email.mime.text import MIMEText
from functools import partial

from bookings.config import Settings
from bookings.models import BookingRequest

logger = logging.getLogger(__name__)


def booking_message(request: BookingRequest) -> tuple[str, str]:
    """Subject and plain-text body announcing a new booking."""
    subject = f"New Booking: {request.name}"
    body = (
        "New appointment booked!\n\n"
        f"Name: {request.name}\n"
        f"Phone: {request.phone}\n"
        f"Service: {request.service}\n"
        f"Date: {request.date}\n"
        f"Time: {request.time}"
    )
    return subject, body


class EmailNotifier:
    """Send plain-text mail through an authenticated SMTP server."""

    def __init__(
        self,
        user: str,
        password: str,
        host: str = "smtp.gmail.com",
        port: int = 465,
        timeout: float = 30,
    ) -> None:
        self._user = user
        self._password = password
        self._host = host
        self._port = port
        self._timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "EmailNotifier":
        return cls(
            user=settings.email_user if settings.email_configured else "",
            password=settings.email_pass,
            host=settings.smtp_host,
            port=settings.smtp_port,
        )

    @property
    def configured(self) -> bool:
        return bool(self._user)

    def _send_sync(self, to: str, subject: str, body: str) -> None:
        msg = MIMEText(body, "plain", "utf-8")
        msg["Subject"] = subject
        msg["From"] = self._user
        msg["To"] = to

        context = ssl.create_default_context()
        if self._port == 465:
            server = smtplib.SMTP_SSL(
                self._host, self._port, context=context, timeout=self._timeout
            )
        else:
            server = smtplib.SMTP(self._host, self._port, timeout=self._timeout)
            server.starttls(context=context)

        try:
            server.login(self._user, self._password)
            server.sendmail(self._user, [to], msg.as_string())
        finally:
            server.quit()

    async def send(self, to: str, subject: str, body: str) -> None:
        """Deliver one message. No-op when unconfigured; raises on SMTP errors."""
        if not self.configured:
            logger.info("Email user not configured, skipping email.")
            return

        loop = asyncio.get_running_loop()
        await loop.run_in_executor(
            None, partial(self._send_sync, to, subject, body)
        )
        logger.info("Sent %r to %s via %s", subject, to, self._host)
