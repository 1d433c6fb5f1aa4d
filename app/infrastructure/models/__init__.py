"""ORM models used by the application infrastructure."""

from .booking import BookingModel
from .equipment import EquipmentModel
from .notification import NotificationModel
from .notification_claim import NotificationClaimModel
from .push_token import PushTokenModel
from .user import UserModel

__all__ = [
    "BookingModel",
    "EquipmentModel",
    "NotificationModel",
    "NotificationClaimModel",
    "PushTokenModel",
    "UserModel",
]
