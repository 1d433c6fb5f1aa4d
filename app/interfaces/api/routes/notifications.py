"""Endpoints for in-app notifications and ad-hoc sends."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.application.use_cases.notifications import (
    NotificationDispatcher,
    list_notifications as list_notifications_uc,
    mark_notifications_read as mark_notifications_read_uc,
    send_custom_notification as send_custom_notification_uc,
)
from app.domain.errors import InvalidArgumentError
from app.infrastructure.database import get_db
from app.interfaces.api.dependencies import (
    api_error,
    get_current_user_id,
    get_notification_dispatcher,
)
from app.interfaces.api.schemas import (
    CustomNotificationRequest,
    NotificationMarkReadRequest,
    NotificationRead,
    SendNotificationResponse,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])
logger = logging.getLogger(__name__)


@router.get("", response_model=list[NotificationRead])
def list_notifications(
    unread_only: bool = Query(False, alias="unreadOnly"),
    limit: int = Query(50, ge=1, le=200),
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """Return the most recent notifications of the authenticated user."""

    notifications = list_notifications_uc(
        db, user_id=user_id, unread_only=unread_only, limit=limit
    )
    return [NotificationRead.from_entity(notification) for notification in notifications]


@router.post("/read")
def mark_notifications_read(
    payload: NotificationMarkReadRequest,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
) -> dict[str, int]:
    updated = mark_notifications_read_uc(
        db, user_id=user_id, notification_ids=payload.unique_ids()
    )
    return {"updated": updated}


@router.post("/send", response_model=SendNotificationResponse)
def send_custom_notification(
    payload: CustomNotificationRequest,
    user_id: str = Depends(get_current_user_id),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
):
    """Send a notification with caller supplied content to one user."""

    try:
        result = send_custom_notification_uc(
            target_user_id=payload.target_user_id,
            title=payload.title,
            body=payload.body,
            data=payload.data,
            dispatcher=dispatcher,
        )
    except InvalidArgumentError as exc:
        raise api_error(status.HTTP_400_BAD_REQUEST, "invalid-argument", str(exc)) from exc

    logger.info("User %s sent a custom notification to %s", user_id, payload.target_user_id)
    return SendNotificationResponse(
        success=True, tickets=[ticket.to_dict() for ticket in result.tickets]
    )
