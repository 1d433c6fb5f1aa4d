"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.domain.entities import Notification


class NotificationMarkReadRequest(BaseModel):
    """Payload used to mark a batch of notifications as read."""

    ids: list[int] = Field(..., min_length=1)

    def unique_ids(self) -> list[int]:
        """Return the identifiers without duplicates, keeping their order."""

        return list(dict.fromkeys(self.ids))


class NotificationRead(BaseModel):
    """Notification as stored for in-app display."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int
    user_id: str
    title: str
    message: str
    data: dict[str, str] = Field(default_factory=dict)
    timestamp: datetime | None = None
    read: bool = False

    @classmethod
    def from_entity(cls, notification: Notification) -> "NotificationRead":
        return cls(
            id=notification.id or 0,
            user_id=notification.user_id,
            title=notification.title,
            message=notification.message,
            data=dict(notification.data),
            timestamp=notification.timestamp,
            read=notification.read,
        )


class CustomNotificationRequest(BaseModel):
    """Body of ``sendCustomNotification``.

    Fields are optional here so that missing values are reported as
    ``invalid-argument`` by the use case instead of a validation error.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    target_user_id: str | None = None
    title: str | None = None
    body: str | None = None
    data: dict[str, Any] | None = None


class SendNotificationResponse(BaseModel):
    success: bool
    tickets: list[dict[str, Any]] = Field(default_factory=list)
