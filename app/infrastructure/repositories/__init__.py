"""Repository implementations for infrastructure layer."""

from .booking_repository import (
    NOTIFIED_CREATION_FIELD,
    NOTIFIED_STATUS_CHANGE_FIELD,
    BookingRepository,
)
from .equipment_repository import EquipmentRepository
from .notification_claim_repository import NotificationClaimRepository
from .notification_repository import NotificationRepository
from .push_token_repository import PushTokenRepository
from .user_repository import UserRepository

__all__ = [
    "BookingRepository",
    "EquipmentRepository",
    "NotificationClaimRepository",
    "NotificationRepository",
    "PushTokenRepository",
    "UserRepository",
    "NOTIFIED_CREATION_FIELD",
    "NOTIFIED_STATUS_CHANGE_FIELD",
]
