"""Turn form date/time strings into absolute intervals.

The booking form sends a calendar date (``YYYY-MM-DD``) and a 12-hour clock
time such as ``"11:00 AM"``. Both are interpreted in the business's configured
time zone.
"""

from __future__ import annotations

import re
from datetime import date as date_cls
from datetime import datetime, time, timedelta, tzinfo

from bookings.calendar_providers.base import Interval
from bookings.errors import InvalidRequest

_TIME_PATTERN = re.compile(r"^\s*(\d{1,2}):(\d{2})\s*([AaPp][Mm])\s*$")


def parse_date(value: str) -> date_cls:
    """Parse ``YYYY-MM-DD`` or raise InvalidRequest."""
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except (ValueError, AttributeError):
        raise InvalidRequest(f"Invalid date {value!r}. Use YYYY-MM-DD.")


def parse_clock(value: str) -> time:
    """Parse ``H:MM AM`` / ``HH:MM PM`` into a 24-hour time."""
    match = _TIME_PATTERN.match(value or "")
    if not match:
        raise InvalidRequest(f"Invalid time {value!r}. Use a time like 11:00 AM.")

    hour, minute, meridiem = int(match.group(1)), int(match.group(2)), match.group(3).upper()
    if not 1 <= hour <= 12 or not 0 <= minute <= 59:
        raise InvalidRequest(f"Invalid time {value!r}. Use a time like 11:00 AM.")

    # 12 must drop to 0 before the PM shift, otherwise 12 PM becomes 24.
    if hour == 12:
        hour = 0
    if meridiem == "PM":
        hour += 12
    return time(hour, minute)


def normalize(
    date: str,
    clock: str,
    tz: tzinfo,
    duration_minutes: int = 60,
) -> Interval:
    """Return the slot starting at ``date`` ``clock`` in ``tz``."""
    start = datetime.combine(parse_date(date), parse_clock(clock), tzinfo=tz)
    return Interval(start=start, end=start + timedelta(minutes=duration_minutes))


def day_window(date: str, tz: tzinfo) -> tuple[datetime, datetime]:
    """00:00:00 through 23:59:59 of ``date`` in ``tz``."""
    day = parse_date(date)
    return (
        datetime.combine(day, time(0, 0, 0), tzinfo=tz),
        datetime.combine(day, time(23, 59, 59), tzinfo=tz),
    )
