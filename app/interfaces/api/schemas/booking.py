"""Pydantic models describing booking payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from app.domain.entities import Booking, BookingStatus


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class BookingCreate(_CamelModel):
    """Booking request submitted by a renter."""

    equipment_id: str = Field(..., min_length=1)
    start_date: datetime
    end_date: datetime
    total_price: float = Field(..., gt=0)
    listing_id: str | None = None
    owner_id: str | None = None

    @model_validator(mode="after")
    def _check_dates(self) -> "BookingCreate":
        if self.start_date >= self.end_date:
            raise ValueError("startDate must be before endDate")
        return self


class BookingStatusUpdate(_CamelModel):
    status: BookingStatus


class BookingRead(_CamelModel):
    """Representation of a booking returned to participants."""

    id: str
    equipment_id: str
    listing_id: str | None = None
    renter_id: str
    owner_id: str
    start_date: datetime
    end_date: datetime
    total_price: float
    booking_date: datetime | None = None
    status: BookingStatus
    equipment_name: str | None = None
    has_notified_creation: bool = False
    has_notified_status_change: bool = False

    @classmethod
    def from_entity(cls, booking: Booking) -> "BookingRead":
        return cls(
            id=booking.id or "",
            equipment_id=booking.equipment_id,
            listing_id=booking.listing_id,
            renter_id=booking.renter_id,
            owner_id=booking.owner_id,
            start_date=booking.start_date,
            end_date=booking.end_date,
            total_price=booking.total_price,
            booking_date=booking.booking_date,
            status=booking.status,
            equipment_name=booking.equipment_name,
            has_notified_creation=booking.has_notified_creation,
            has_notified_status_change=booking.has_notified_status_change,
        )
