"""Slot conflict detection."""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, Protocol


class Span(Protocol):
    """Anything with a start and end instant (Interval, ProviderEvent)."""

    start: datetime
    end: datetime


def overlaps(a: Span, b: Span) -> bool:
    """Half-open overlap test; intervals that only touch do not overlap."""
    return a.start < b.end and a.end > b.start


def has_overlap(candidate: Span, existing: Iterable[Span]) -> bool:
    """True if ``candidate`` overlaps any span in ``existing``."""
    return any(overlaps(candidate, other) for other in existing)
