"""Push relay integration for the infrastructure layer."""

from .expo import (
    DEVICE_NOT_REGISTERED,
    ExpoPushClient,
    PushMessage,
    PushTicket,
    chunk_messages,
    get_push_client,
    is_expo_push_token,
)

__all__ = [
    "DEVICE_NOT_REGISTERED",
    "ExpoPushClient",
    "PushMessage",
    "PushTicket",
    "chunk_messages",
    "get_push_client",
    "is_expo_push_token",
]
