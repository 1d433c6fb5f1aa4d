"""Use cases for booking requests and their lifecycle."""

from .classify import classify
from .create_booking import create_booking
from .queries import get_booking, list_bookings
from .status_policy import DEFAULT_TRANSITIONS, StatusTransitionPolicy, get_status_policy
from .update_booking_status import update_booking_status
from .validators import validate_booking

__all__ = [
    "DEFAULT_TRANSITIONS",
    "StatusTransitionPolicy",
    "classify",
    "create_booking",
    "get_booking",
    "get_status_policy",
    "list_bookings",
    "update_booking_status",
    "validate_booking",
]
