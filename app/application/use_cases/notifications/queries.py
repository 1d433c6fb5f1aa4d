"""Read and acknowledge the notifications of a user."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from sqlalchemy.orm import Session

from app.domain.entities import Notification
from app.infrastructure.repositories import NotificationRepository


def list_notifications(
    session: Session,
    *,
    user_id: str,
    unread_only: bool = False,
    limit: int = 50,
) -> Sequence[Notification]:
    if limit < 1:
        raise ValueError("limit must be positive")
    return NotificationRepository(session).list_for_user(
        user_id, unread_only=unread_only, limit=limit
    )


def mark_notifications_read(
    session: Session, *, user_id: str, notification_ids: Iterable[int]
) -> int:
    """Mark the given notifications as read. Ids of other users are ignored."""

    return NotificationRepository(session).mark_as_read(notification_ids, user_id=user_id)


__all__ = ["list_notifications", "mark_notifications_read"]
