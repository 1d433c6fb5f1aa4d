"""Handle booking document writes and send the matching notifications.

The handler is the single entry point for the booking change stream. It is
invoked once per write with the snapshots before and after the write, and it
may be invoked more than once for the same write. It never raises: every
failure is logged with the booking id and the step that failed and reported
through :class:`TriggerOutcome`.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from app.application.use_cases.bookings import (
    StatusTransitionPolicy,
    classify,
    get_status_policy,
    validate_booking,
)
from app.config import get_settings
from app.domain.entities import Created, StatusChanged
from app.domain.errors import (
    BookingValidationError,
    InvalidStatusTransitionError,
    TransientError,
)
from app.infrastructure.push import get_push_client

from .composer import compose
from .deduplication import NotificationDeduplicator
from .dispatcher import DeliveryResult, NotificationDispatcher
from .related import RelatedEntityLoader

logger = logging.getLogger(__name__)

OUTCOME_DELETED = "deleted"
OUTCOME_MISSING_DATA = "missing_data"
OUTCOME_INVALID = "invalid"
OUTCOME_NOOP = "noop"
OUTCOME_ALREADY_NOTIFIED = "already_notified"
OUTCOME_DUPLICATE = "duplicate"
OUTCOME_SKIPPED = "skipped"
OUTCOME_NOTIFIED = "notified"
OUTCOME_RETRYABLE = "retryable_error"
OUTCOME_FAILED = "failed"


@dataclass(frozen=True)
class TriggerOutcome:
    booking_id: str
    status: str
    event: str | None = None
    step: str | None = None
    detail: str | None = None
    delivery: DeliveryResult | None = None

    @property
    def retryable(self) -> bool:
        return self.status == OUTCOME_RETRYABLE

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "bookingId": self.booking_id,
            "outcome": self.status,
            "event": self.event,
        }
        if self.step:
            payload["step"] = self.step
        if self.detail:
            payload["detail"] = self.detail
        if self.delivery is not None:
            payload["notificationId"] = self.delivery.notification_id
            payload["pushStatus"] = self.delivery.push_status
        return payload


def handle_booking_write(
    session: Session,
    booking_id: str,
    before: Mapping[str, Any] | None,
    after: Mapping[str, Any] | None,
    *,
    dispatcher: NotificationDispatcher | None = None,
    loader: RelatedEntityLoader | None = None,
    session_factory: Callable[[], Session] | None = None,
    policy: StatusTransitionPolicy | None = None,
) -> TriggerOutcome:
    """Process one booking write.

    ``before`` is ``None`` for a newly created booking and ``after`` is
    ``None`` once the booking has been deleted. Only creations and the status
    changes to ``accepted`` or ``cancelled`` produce notifications; each of
    them is delivered at most once per booking.
    """

    step = "guard"
    event_name: str | None = None
    try:
        if after is None:
            logger.info("booking=%s step=%s: booking deleted, nothing to notify", booking_id, step)
            return TriggerOutcome(booking_id, OUTCOME_DELETED, event="deleted")
        if not after:
            logger.error("booking=%s step=%s: no data associated with the event", booking_id, step)
            return TriggerOutcome(booking_id, OUTCOME_MISSING_DATA, step=step)

        step = "validate"
        try:
            booking = validate_booking(after, booking_id=booking_id)
        except BookingValidationError as exc:
            logger.error("booking=%s step=%s: invalid booking document: %s", booking_id, step, exc)
            return TriggerOutcome(booking_id, OUTCOME_INVALID, step=step, detail=str(exc))

        step = "classify"
        event = classify(before, booking, booking_id=booking_id)
        if isinstance(event, Created):
            event_name = "created"
        elif isinstance(event, StatusChanged):
            event_name = "status_changed"
            policy = policy or get_status_policy()
            if not policy.is_allowed(event.old_status, event.new_status):
                logger.warning(
                    "booking=%s step=%s: %s",
                    booking_id,
                    step,
                    InvalidStatusTransitionError(event.old_status or "", event.new_status.value),
                )
        else:
            logger.debug("booking=%s step=%s: status unchanged", booking_id, step)
            return TriggerOutcome(booking_id, OUTCOME_NOOP, event="noop")

        step = "deduplicate"
        deduplicator = NotificationDeduplicator(session)
        if not deduplicator.should_notify(event, booking):
            logger.info(
                "booking=%s step=%s: %s notification already sent", booking_id, step, event_name
            )
            return TriggerOutcome(booking_id, OUTCOME_ALREADY_NOTIFIED, event=event_name)
        if not deduplicator.claim(booking_id, event):
            return TriggerOutcome(booking_id, OUTCOME_DUPLICATE, event=event_name)

        settings = get_settings()
        delivered = False
        try:
            step = "fetch_related"
            if loader is None:
                if session_factory is None:
                    from app.infrastructure.database import SessionLocal

                    session_factory = SessionLocal
                loader = RelatedEntityLoader(
                    session_factory, timeout=settings.entity_fetch_timeout_seconds
                )
            related = loader.load(booking)

            step = "compose"
            composed = compose(event, related.equipment, related.requester)
            if composed is None:
                logger.info(
                    "booking=%s step=%s: status %s does not notify",
                    booking_id,
                    step,
                    booking.status.value,
                )
                step = "mark_notified"
                deduplicator.mark_notified(booking_id, event)
                return TriggerOutcome(booking_id, OUTCOME_SKIPPED, event=event_name)

            step = "dispatch"
            if dispatcher is None:
                dispatcher = NotificationDispatcher(
                    session, get_push_client(), batch_size=settings.push_batch_size
                )
            delivery = dispatcher.dispatch(
                composed.recipient_id, composed.title, composed.body, composed.payload
            )
            delivered = True

            step = "mark_notified"
            deduplicator.mark_notified(booking_id, event)
        except (TransientError, OperationalError) as exc:
            session.rollback()
            logger.warning(
                "booking=%s step=%s: transient failure, leaving the event for redelivery: %s",
                booking_id,
                step,
                exc,
            )
            if not delivered:
                deduplicator.release(booking_id, event)
            return TriggerOutcome(
                booking_id, OUTCOME_RETRYABLE, event=event_name, step=step, detail=str(exc)
            )

        logger.info(
            "booking=%s step=%s: %s notification sent to %s (push=%s)",
            booking_id,
            step,
            event_name,
            composed.recipient_id,
            delivery.push_status,
        )
        return TriggerOutcome(booking_id, OUTCOME_NOTIFIED, event=event_name, delivery=delivery)
    except Exception as exc:
        logger.exception("booking=%s step=%s: unexpected error", booking_id, step)
        try:
            session.rollback()
        except Exception:
            logger.exception("booking=%s: rollback failed", booking_id)
        return TriggerOutcome(
            booking_id, OUTCOME_FAILED, event=event_name, step=step, detail=str(exc)
        )


__all__ = [
    "OUTCOME_ALREADY_NOTIFIED",
    "OUTCOME_DELETED",
    "OUTCOME_DUPLICATE",
    "OUTCOME_FAILED",
    "OUTCOME_INVALID",
    "OUTCOME_MISSING_DATA",
    "OUTCOME_NOOP",
    "OUTCOME_NOTIFIED",
    "OUTCOME_RETRYABLE",
    "OUTCOME_SKIPPED",
    "TriggerOutcome",
    "handle_booking_write",
]
