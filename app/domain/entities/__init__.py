"""Domain entities exposed by the application."""

from .booking import Booking, BookingStatus
from .booking_event import BookingEvent, Created, Deleted, NoOp, StatusChanged
from .equipment import Equipment
from .notification import Notification
from .notification_payload import (
    NOTIFICATION_TYPE_BOOKING_CANCELLED,
    NOTIFICATION_TYPE_BOOKING_CONFIRMED,
    NOTIFICATION_TYPE_BOOKING_REQUEST,
    BookingRequestPayload,
    BookingStatusPayload,
    CustomPayload,
    NotificationPayload,
)
from .push_token import PushToken
from .user import User

__all__ = [
    "Booking",
    "BookingStatus",
    "BookingEvent",
    "Created",
    "Deleted",
    "NoOp",
    "StatusChanged",
    "Equipment",
    "Notification",
    "NotificationPayload",
    "BookingRequestPayload",
    "BookingStatusPayload",
    "CustomPayload",
    "NOTIFICATION_TYPE_BOOKING_REQUEST",
    "NOTIFICATION_TYPE_BOOKING_CONFIRMED",
    "NOTIFICATION_TYPE_BOOKING_CANCELLED",
    "PushToken",
    "User",
]
