"""Background work scheduled by the HTTP interface."""

from __future__ import annotations

import logging
from typing import Any

from app.application.use_cases.notifications import (
    NotificationDispatcher,
    handle_booking_write,
)
from app.application.use_cases.notifications.dispatcher import PushClient
from app.config import get_settings
from app.infrastructure.database import SessionLocal

logger = logging.getLogger(__name__)


def run_booking_trigger(
    booking_id: str,
    before: dict[str, Any] | None,
    after: dict[str, Any] | None,
    push_client: PushClient,
) -> None:
    """Feed a booking write made through the API to the notification trigger.

    The request session is closed by the time background tasks run, so the
    trigger gets a session of its own.
    """

    session = SessionLocal()
    try:
        dispatcher = NotificationDispatcher(
            session, push_client, batch_size=get_settings().push_batch_size
        )
        outcome = handle_booking_write(
            session,
            booking_id,
            before,
            after,
            dispatcher=dispatcher,
            session_factory=SessionLocal,
        )
        logger.debug("Booking trigger for %s finished with %s", booking_id, outcome.status)
    finally:
        session.close()


__all__ = ["run_booking_trigger"]
