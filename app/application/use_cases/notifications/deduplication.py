"""At-most-once bookkeeping for booking notifications."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from app.domain.entities import Booking, BookingEvent, Created, StatusChanged
from app.infrastructure.repositories import (
    NOTIFIED_CREATION_FIELD,
    NOTIFIED_STATUS_CHANGE_FIELD,
    BookingRepository,
    NotificationClaimRepository,
)

logger = logging.getLogger(__name__)

KIND_CREATION = "creation"
KIND_STATUS_CHANGE = "status_change"


def notification_kind(event: BookingEvent) -> str:
    """Return the idempotency key kind used for ``event``."""

    if isinstance(event, Created):
        return KIND_CREATION
    if isinstance(event, StatusChanged):
        return KIND_STATUS_CHANGE
    raise ValueError(f"{type(event).__name__} events are never notified")


class NotificationDeduplicator:
    """Combine the booking flags with the claim store.

    The flags on the booking record are what clients and later snapshots see.
    The claim store is the atomic guard: a redelivered event racing the first
    invocation loses the claim even though its snapshot still shows the flag
    unset.
    """

    def __init__(self, session: Session) -> None:
        self._bookings = BookingRepository(session)
        self._claims = NotificationClaimRepository(session)

    @staticmethod
    def should_notify(event: BookingEvent, after: Booking) -> bool:
        if isinstance(event, Created):
            return not after.has_notified_creation
        if isinstance(event, StatusChanged):
            return not after.has_notified_status_change
        return False

    def claim(self, booking_id: str, event: BookingEvent) -> bool:
        return self._claims.claim(booking_id, notification_kind(event))

    def release(self, booking_id: str, event: BookingEvent) -> None:
        self._claims.release(booking_id, notification_kind(event))

    def mark_notified(self, booking_id: str, event: BookingEvent) -> None:
        field = (
            NOTIFIED_CREATION_FIELD
            if notification_kind(event) == KIND_CREATION
            else NOTIFIED_STATUS_CHANGE_FIELD
        )
        if not self._bookings.set_notified_flag(booking_id, field):
            logger.info(
                "Booking %s is not stored locally; %s recorded in the claim store only",
                booking_id,
                field,
            )


__all__ = [
    "KIND_CREATION",
    "KIND_STATUS_CHANGE",
    "NotificationDeduplicator",
    "notification_kind",
]
