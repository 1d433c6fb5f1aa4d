"""Deliver notifications in-app and through the push relay."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Protocol

from sqlalchemy.orm import Session

from app.config import EXPO_MAX_BATCH_SIZE
from app.domain.entities import Notification, NotificationPayload
from app.domain.errors import DeliveryError
from app.infrastructure.push import (
    DEVICE_NOT_REGISTERED,
    PushMessage,
    PushTicket,
    chunk_messages,
    is_expo_push_token,
)
from app.infrastructure.repositories import NotificationRepository, PushTokenRepository

logger = logging.getLogger(__name__)

PUSH_STATUS_SENT = "sent"
PUSH_STATUS_PARTIAL = "partial"
PUSH_STATUS_FAILED = "failed"
PUSH_STATUS_SKIPPED = "skipped"
PUSH_STATUS_INVALID_TOKEN = "invalid_token"


class PushClient(Protocol):
    def send(self, messages: Sequence[PushMessage]) -> list[PushTicket]: ...


@dataclass
class DeliveryResult:
    """Outcome of a single :meth:`NotificationDispatcher.dispatch` call."""

    notification: Notification | None
    in_app_delivered: bool
    push_status: str
    tickets: list[PushTicket] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def notification_id(self) -> int | None:
        return self.notification.id if self.notification else None


class NotificationDispatcher:
    """Persist a notification and push it to the recipient's device.

    The in-app record is written first and failures there propagate, since
    the caller may retry. Everything after it is best effort: push problems
    are logged and reported through :class:`DeliveryResult` only.
    """

    def __init__(
        self,
        session: Session,
        push_client: PushClient,
        *,
        batch_size: int = EXPO_MAX_BATCH_SIZE,
    ) -> None:
        if not 1 <= batch_size <= EXPO_MAX_BATCH_SIZE:
            raise ValueError(f"batch_size must be between 1 and {EXPO_MAX_BATCH_SIZE}")
        self.session = session
        self._push_client = push_client
        self._batch_size = batch_size

    def dispatch(
        self,
        recipient_id: str,
        title: str,
        body: str,
        data: NotificationPayload | Mapping[str, str] | None = None,
    ) -> DeliveryResult:
        wire_data = _to_wire(data)
        notification = NotificationRepository(self.session).create(
            Notification(
                id=None,
                user_id=recipient_id,
                title=title,
                message=body,
                data=wire_data,
            )
        )
        logger.debug("Stored notification %s for user %s", notification.id, recipient_id)

        try:
            push_token = PushTokenRepository(self.session).get(recipient_id)
        except Exception as exc:
            logger.exception("Could not load the push token of user %s", recipient_id)
            self.session.rollback()
            return DeliveryResult(
                notification=notification,
                in_app_delivered=True,
                push_status=PUSH_STATUS_FAILED,
                errors=[f"Token lookup failed: {exc}"],
            )

        if push_token is None or not push_token.token:
            logger.info("No push token for user %s; push skipped", recipient_id)
            return DeliveryResult(
                notification=notification,
                in_app_delivered=True,
                push_status=PUSH_STATUS_SKIPPED,
                errors=["no token"],
            )

        if not is_expo_push_token(push_token.token):
            logger.warning(
                "Push token of user %s is not a valid Expo push token: %s",
                recipient_id,
                push_token.token,
            )
            return DeliveryResult(
                notification=notification,
                in_app_delivered=True,
                push_status=PUSH_STATUS_INVALID_TOKEN,
                errors=["invalid token"],
            )

        message = PushMessage(to=push_token.token, title=title, body=body, data=wire_data)
        tickets, errors = self.send_messages({recipient_id: message})
        delivered = [ticket for ticket in tickets if not ticket.is_error]
        if errors and not delivered:
            push_status = PUSH_STATUS_FAILED
        elif errors:
            push_status = PUSH_STATUS_PARTIAL
        else:
            push_status = PUSH_STATUS_SENT
        return DeliveryResult(
            notification=notification,
            in_app_delivered=True,
            push_status=push_status,
            tickets=tickets,
            errors=errors,
        )

    def send_messages(
        self, messages: Mapping[str, PushMessage]
    ) -> tuple[list[PushTicket], list[str]]:
        """Send ``messages`` keyed by recipient in relay-sized chunks.

        Returns the tickets received and a list of error descriptions. Never
        raises.
        """

        recipients = list(messages.keys())
        ordered = [messages[recipient] for recipient in recipients]
        tickets: list[PushTicket] = []
        errors: list[str] = []
        offset = 0
        for chunk in chunk_messages(ordered, self._batch_size):
            chunk_recipients = recipients[offset : offset + len(chunk)]
            offset += len(chunk)
            try:
                chunk_tickets = self._push_client.send(chunk)
            except Exception as exc:
                logger.error(
                    "Push relay request for %s message(s) failed: %s", len(chunk), exc
                )
                errors.append(str(exc))
                continue

            tickets.extend(chunk_tickets)
            for recipient_id, sent, ticket in zip(chunk_recipients, chunk, chunk_tickets):
                if not ticket.is_error:
                    continue
                error = DeliveryError(recipient_id, ticket.message or ticket.status)
                logger.error("%s (code=%s)", error, ticket.error_code)
                errors.append(str(error))
                if ticket.error_code == DEVICE_NOT_REGISTERED:
                    self._forget_token(recipient_id, sent.to)
        return tickets, errors

    def _forget_token(self, recipient_id: str, token: str) -> None:
        try:
            removed = PushTokenRepository(self.session).delete_if_matches(recipient_id, token)
        except Exception:
            logger.exception("Could not remove the stale push token of user %s", recipient_id)
            self.session.rollback()
            return
        if removed:
            logger.info("Removed unregistered push token of user %s", recipient_id)


def _to_wire(data: NotificationPayload | Mapping[str, str] | None) -> dict[str, str]:
    if data is None:
        return {}
    to_wire = getattr(data, "to_wire", None)
    if callable(to_wire):
        return to_wire()
    return {str(key): str(value) for key, value in data.items()}  # type: ignore[union-attr]


__all__ = [
    "DeliveryResult",
    "NotificationDispatcher",
    "PUSH_STATUS_FAILED",
    "PUSH_STATUS_INVALID_TOKEN",
    "PUSH_STATUS_PARTIAL",
    "PUSH_STATUS_SENT",
    "PUSH_STATUS_SKIPPED",
    "PushClient",
]
