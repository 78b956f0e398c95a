"""Data models for the booking service."""

from .booking import (
    PHONE_NOT_PROVIDED,
    Appointment,
    BookingConfirmation,
    BookingRequest,
)

__all__ = [
    "Appointment",
    "BookingConfirmation",
    "BookingRequest",
    "PHONE_NOT_PROVIDED",
]
