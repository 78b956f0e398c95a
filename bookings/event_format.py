"""Encoding of booking fields into calendar event text.

The calendar has no structured fields for customer data, so name, service and
phone are written into the event's summary and description:

    summary:      "Booking: <name> - <service>"
    description:  "Phone: <phone>"

Decoding splits the summary on the last separator. Names are free text and may
contain " - "; services come from the booking form's fixed list and do not.
"""

from __future__ import annotations

import re
from typing import Optional

SUMMARY_PREFIX = "Booking: "
SEPARATOR = " - "
PHONE_PREFIX = "Phone: "

_PHONE_LINE = re.compile(r"^Phone: (.*)$", re.MULTILINE)


def encode_summary(name: str, service: str) -> str:
    return f"{SUMMARY_PREFIX}{name}{SEPARATOR}{service}"


def decode_summary(summary: str) -> tuple[str, Optional[str]]:
    """Return ``(name, service)``.

    Summaries not written by this service come back as ``(summary, None)``.
    """
    if not summary.startswith(SUMMARY_PREFIX):
        return summary, None
    body = summary[len(SUMMARY_PREFIX):]
    name, sep, service = body.rpartition(SEPARATOR)
    if not sep:
        return body, None
    return name, service


def encode_description(phone: str) -> str:
    return f"{PHONE_PREFIX}{phone}"


def decode_phone(description: str) -> Optional[str]:
    match = _PHONE_LINE.search(description or "")
    return match.group(1) if match else None
