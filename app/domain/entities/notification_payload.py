"""Typed payloads attached to notifications, one variant per notification type.

Payloads stay typed inside the application and are flattened into the
string map expected by clients only when a notification is persisted or
handed to the push relay (see :meth:`to_wire`).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Union

NOTIFICATION_TYPE_BOOKING_REQUEST = "booking_request"
NOTIFICATION_TYPE_BOOKING_CONFIRMED = "booking_confirmed"
NOTIFICATION_TYPE_BOOKING_CANCELLED = "booking_cancelled"


@dataclass(frozen=True)
class BookingRequestPayload:
    """Sent to the owner when a renter requests a booking."""

    type: ClassVar[str] = NOTIFICATION_TYPE_BOOKING_REQUEST

    booking_id: str
    equipment_id: str
    equipment_name: str
    renter_id: str

    def to_wire(self) -> dict[str, str]:
        return {
            "bookingId": self.booking_id,
            "type": self.type,
            "equipmentId": self.equipment_id,
            "equipmentName": self.equipment_name,
            "renterId": self.renter_id,
        }


@dataclass(frozen=True)
class BookingStatusPayload:
    """Sent to the renter when the owner confirms or a party cancels."""

    notification_type: str
    booking_id: str
    equipment_id: str
    equipment_name: str
    status: str

    def __post_init__(self) -> None:
        allowed = {
            NOTIFICATION_TYPE_BOOKING_CONFIRMED,
            NOTIFICATION_TYPE_BOOKING_CANCELLED,
        }
        if self.notification_type not in allowed:
            raise ValueError(f"Unsupported status notification type: {self.notification_type}")

    def to_wire(self) -> dict[str, str]:
        return {
            "bookingId": self.booking_id,
            "type": self.notification_type,
            "equipmentId": self.equipment_id,
            "equipmentName": self.equipment_name,
            "status": self.status,
        }


@dataclass(frozen=True)
class CustomPayload:
    """Free-form payload supplied by callers of the custom send endpoint."""

    values: dict[str, str] = field(default_factory=dict)

    def to_wire(self) -> dict[str, str]:
        return {str(key): str(value) for key, value in self.values.items()}


NotificationPayload = Union[BookingRequestPayload, BookingStatusPayload, CustomPayload]


__all__ = [
    "BookingRequestPayload",
    "BookingStatusPayload",
    "CustomPayload",
    "NOTIFICATION_TYPE_BOOKING_CANCELLED",
    "NOTIFICATION_TYPE_BOOKING_CONFIRMED",
    "NOTIFICATION_TYPE_BOOKING_REQUEST",
    "NotificationPayload",
]
