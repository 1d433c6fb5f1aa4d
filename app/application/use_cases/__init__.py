"""Aggregate application use cases."""

from .bookings import create_booking, update_booking_status, validate_booking
from .notifications import handle_booking_write, register_push_token, send_custom_notification

__all__ = [
    "create_booking",
    "handle_booking_write",
    "register_push_token",
    "send_custom_notification",
    "update_booking_status",
    "validate_booking",
]
