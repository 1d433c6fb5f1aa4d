"""Send an ad-hoc notification to a single user."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from app.domain.entities import CustomPayload
from app.domain.errors import InvalidArgumentError

from .dispatcher import DeliveryResult, NotificationDispatcher

logger = logging.getLogger(__name__)


def send_custom_notification(
    *,
    target_user_id: str | None,
    title: str | None,
    body: str | None,
    data: Mapping[str, Any] | None,
    dispatcher: NotificationDispatcher,
) -> DeliveryResult:
    if not target_user_id or not title or not body:
        raise InvalidArgumentError("Missing required fields")
    if data is not None and not isinstance(data, Mapping):
        raise InvalidArgumentError("data must be an object")

    payload = CustomPayload({str(key): str(value) for key, value in (data or {}).items()})
    result = dispatcher.dispatch(target_user_id, title, body, payload)
    logger.info(
        "Custom notification %s sent to user %s (push=%s)",
        result.notification_id,
        target_user_id,
        result.push_status,
    )
    return result


__all__ = ["send_custom_notification"]
