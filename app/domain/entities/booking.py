"""Domain entity representing an equipment booking request."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class BookingStatus(str, Enum):
    """Lifecycle states a booking can be in."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @classmethod
    def values(cls) -> tuple[str, ...]:
        return tuple(member.value for member in cls)


@dataclass(frozen=True)
class Booking:
    """Rental request from a renter to an equipment owner."""

    id: str | None
    equipment_id: str
    listing_id: str | None
    renter_id: str
    owner_id: str
    start_date: datetime
    end_date: datetime
    total_price: float
    booking_date: datetime | None
    status: BookingStatus
    has_notified_creation: bool = False
    has_notified_status_change: bool = False
    equipment_name: str | None = None

    def to_document(self) -> dict[str, object]:
        """Return the camelCase document shape used by the change stream."""

        return {
            "equipmentId": self.equipment_id,
            "listingId": self.listing_id,
            "renterId": self.renter_id,
            "ownerId": self.owner_id,
            "startDate": self.start_date.isoformat(),
            "endDate": self.end_date.isoformat(),
            "totalPrice": self.total_price,
            "bookingDate": self.booking_date.isoformat() if self.booking_date else None,
            "status": self.status.value,
            "hasNotifiedCreation": self.has_notified_creation,
            "hasNotifiedStatusChange": self.has_notified_status_change,
            "equipmentName": self.equipment_name,
        }


__all__ = ["Booking", "BookingStatus"]
