"""Idempotency key store backing notification deduplication."""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.infrastructure.models import NotificationClaimModel
from app.utils import now_naive_utc

logger = logging.getLogger(__name__)


class NotificationClaimRepository:
    """Insert-if-absent claims keyed by booking id and event kind."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def claim(self, booking_id: str, kind: str) -> bool:
        """Atomically claim ``(booking_id, kind)``.

        The unique constraint makes the insert a compare-and-swap: exactly one
        caller succeeds, every concurrent or later caller gets ``False``.
        """

        self.session.add(
            NotificationClaimModel(
                booking_id=booking_id,
                kind=kind,
                claimed_at=now_naive_utc(),
            )
        )
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            logger.info("Notification claim already held booking=%s kind=%s", booking_id, kind)
            return False
        return True

    def release(self, booking_id: str, kind: str) -> None:
        self.session.query(NotificationClaimModel).filter(
            NotificationClaimModel.booking_id == booking_id,
            NotificationClaimModel.kind == kind,
        ).delete(synchronize_session=False)
        self.session.commit()

    def exists(self, booking_id: str, kind: str) -> bool:
        return (
            self.session.query(NotificationClaimModel.id)
            .filter(
                NotificationClaimModel.booking_id == booking_id,
                NotificationClaimModel.kind == kind,
            )
            .first()
            is not None
        )


__all__ = ["NotificationClaimRepository"]
