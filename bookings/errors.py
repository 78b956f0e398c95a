"""Error taxonomy for booking operations.

Every error carries the HTTP status the API layer reports for it:

  InvalidRequest   400  missing or malformed input
  SlotUnavailable  400  requested slot overlaps an existing booking
  ProviderFailure  500  calendar provider (or other collaborator) failed
  CancelFailed     500  provider refused or failed to delete an event
"""

from __future__ import annotations


class BookingError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code = 500

    def __init__(self, message: str, detail: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail

    def to_dict(self) -> dict:
        body = {"message": self.message}
        if self.detail is not None:
            body["error"] = self.detail
        return body


class InvalidRequest(BookingError):
    status_code = 400


class SlotUnavailable(BookingError):
    status_code = 400

    def __init__(self, message: str = "Sorry, this time slot is already booked.") -> None:
        super().__init__(message)


class ProviderFailure(BookingError):
    """Wraps an exception raised by the calendar provider."""

    status_code = 500

    @classmethod
    def wrap(cls, message: str, exc: BaseException) -> "ProviderFailure":
        return cls(message, detail=str(exc) or exc.__class__.__name__)


class CancelFailed(ProviderFailure):
    pass
