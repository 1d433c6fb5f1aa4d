"""Pydantic schemas exposed by the HTTP interface."""

from .booking import BookingCreate, BookingRead, BookingStatusUpdate
from .notification import (
    CustomNotificationRequest,
    NotificationMarkReadRequest,
    NotificationRead,
    SendNotificationResponse,
)
from .push_token import PushTokenRegister, SuccessResponse
from .trigger import BookingChangeEvent, TriggerResult

__all__ = [
    "BookingChangeEvent",
    "BookingCreate",
    "BookingRead",
    "BookingStatusUpdate",
    "CustomNotificationRequest",
    "NotificationMarkReadRequest",
    "NotificationRead",
    "PushTokenRegister",
    "SendNotificationResponse",
    "SuccessResponse",
    "TriggerResult",
]
