"""Pydantic models for booking requests and responses."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from bookings.errors import InvalidRequest

PHONE_NOT_PROVIDED = "Not provided"

REQUIRED_FIELDS = ("name", "service", "date", "time")


class BookingRequest(BaseModel):
    """Data submitted through the public booking form."""

    name: str
    phone: str = PHONE_NOT_PROVIDED
    service: str
    date: str  # YYYY-MM-DD
    time: str  # H:MM AM|PM

    @field_validator("name", "service", "date", "time", mode="before")
    @classmethod
    def _strip(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value

    @field_validator("phone", mode="before")
    @classmethod
    def _default_phone(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return PHONE_NOT_PROVIDED
        return value.strip() if isinstance(value, str) else value

    @classmethod
    def from_payload(cls, payload: Any) -> "BookingRequest":
        """Build a request from decoded JSON, rejecting missing fields."""
        if not isinstance(payload, dict):
            payload = {}
        for key in REQUIRED_FIELDS:
            value = payload.get(key)
            if not isinstance(value, str) or not value.strip():
                raise InvalidRequest("Name, service, date, and time are required.")
        return cls(
            name=payload["name"],
            phone=payload.get("phone") if isinstance(payload.get("phone"), str) else None,
            service=payload["service"],
            date=payload["date"],
            time=payload["time"],
        )


class BookingConfirmation(BaseModel):
    """Result returned after a successful booking."""

    message: str = "Booking successful!"
    event_id: str = Field(serialization_alias="eventId")
    start_time: datetime = Field(serialization_alias="startTime")
    end_time: datetime = Field(serialization_alias="endTime")
    notified: bool = False


class Appointment(BaseModel):
    """A booked event as shown on the admin dashboard."""

    id: str
    summary: str
    description: str = ""
    start_time: datetime = Field(serialization_alias="startTime")
    end_time: datetime = Field(serialization_alias="endTime")

    # Decoded from summary/description
    name: str = ""
    service: Optional[str] = None
    phone: Optional[str] = None
