"""Notification use cases for booking lifecycle events."""

from .booking_trigger import TriggerOutcome, handle_booking_write
from .composer import ComposedNotification, compose
from .custom import send_custom_notification
from .deduplication import NotificationDeduplicator, notification_kind
from .dispatcher import DeliveryResult, NotificationDispatcher
from .push_tokens import register_push_token
from .queries import list_notifications, mark_notifications_read
from .related import RelatedEntities, RelatedEntityLoader

__all__ = [
    "ComposedNotification",
    "DeliveryResult",
    "NotificationDeduplicator",
    "NotificationDispatcher",
    "RelatedEntities",
    "RelatedEntityLoader",
    "TriggerOutcome",
    "compose",
    "handle_booking_write",
    "list_notifications",
    "mark_notifications_read",
    "notification_kind",
    "register_push_token",
    "send_custom_notification",
]
