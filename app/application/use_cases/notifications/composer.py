"""Build notification text for booking lifecycle events."""

from __future__ import annotations

from dataclasses import dataclass

from app.domain.entities import (
    NOTIFICATION_TYPE_BOOKING_CANCELLED,
    NOTIFICATION_TYPE_BOOKING_CONFIRMED,
    Booking,
    BookingEvent,
    BookingRequestPayload,
    BookingStatus,
    BookingStatusPayload,
    Created,
    Equipment,
    NotificationPayload,
    StatusChanged,
    User,
)

TITLE_BOOKING_REQUEST = "New Booking Request"
TITLE_BOOKING_STATUS = "Booking Status Update"

FALLBACK_REQUESTER_NAME = "Someone"
FALLBACK_EQUIPMENT_NAME = "equipment"
FALLBACK_STATUS_EQUIPMENT_NAME = "your equipment"

_STATUS_NOTIFICATIONS = {
    BookingStatus.ACCEPTED: (NOTIFICATION_TYPE_BOOKING_CONFIRMED, "confirmed"),
    BookingStatus.CANCELLED: (NOTIFICATION_TYPE_BOOKING_CANCELLED, "cancelled"),
}


@dataclass(frozen=True)
class ComposedNotification:
    """Recipient and content of a notification ready for dispatch."""

    recipient_id: str
    title: str
    body: str
    payload: NotificationPayload


def compose(
    event: BookingEvent,
    equipment: Equipment | None,
    requester: User | None,
) -> ComposedNotification | None:
    """Return the notification for ``event``, or ``None`` when it does not notify."""

    if isinstance(event, Created):
        booking = event.booking
        equipment_name = _equipment_name(equipment, booking, FALLBACK_EQUIPMENT_NAME)
        requester_name = (requester.display_name if requester else None) or FALLBACK_REQUESTER_NAME
        return ComposedNotification(
            recipient_id=booking.owner_id,
            title=TITLE_BOOKING_REQUEST,
            body=f"{requester_name} has requested to book your {equipment_name}",
            payload=BookingRequestPayload(
                booking_id=booking.id or "",
                equipment_id=booking.equipment_id,
                equipment_name=equipment_name,
                renter_id=booking.renter_id,
            ),
        )

    if isinstance(event, StatusChanged):
        outcome = _STATUS_NOTIFICATIONS.get(event.new_status)
        if outcome is None:
            return None
        notification_type, verb = outcome
        booking = event.booking
        equipment_name = _equipment_name(equipment, booking, FALLBACK_STATUS_EQUIPMENT_NAME)
        return ComposedNotification(
            recipient_id=booking.renter_id,
            title=TITLE_BOOKING_STATUS,
            body=f"Your booking for {equipment_name} has been {verb}.",
            payload=BookingStatusPayload(
                notification_type=notification_type,
                booking_id=booking.id or "",
                equipment_id=booking.equipment_id,
                equipment_name=equipment_name,
                status=event.new_status.value,
            ),
        )

    return None


def _equipment_name(equipment: Equipment | None, booking: Booking, fallback: str) -> str:
    for candidate in (equipment.name if equipment else None, booking.equipment_name):
        if candidate and candidate.strip():
            return candidate.strip()
    return fallback


__all__ = [
    "ComposedNotification",
    "FALLBACK_EQUIPMENT_NAME",
    "FALLBACK_REQUESTER_NAME",
    "FALLBACK_STATUS_EQUIPMENT_NAME",
    "TITLE_BOOKING_REQUEST",
    "TITLE_BOOKING_STATUS",
    "compose",
]
