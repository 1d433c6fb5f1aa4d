"""Use case for moving a booking to a new status."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.orm import Session

from app.domain.entities import Booking, BookingStatus
from app.domain.errors import BookingNotFoundError
from app.infrastructure.repositories import BookingRepository

from .status_policy import StatusTransitionPolicy, get_status_policy

logger = logging.getLogger(__name__)

OWNER_ONLY_STATUSES = frozenset(
    {BookingStatus.ACCEPTED, BookingStatus.REJECTED, BookingStatus.COMPLETED}
)


def update_booking_status(
    session: Session,
    *,
    booking_id: str,
    actor_id: str,
    status: BookingStatus,
    policy: StatusTransitionPolicy | None = None,
) -> tuple[dict[str, Any], Booking]:
    """Apply ``status`` and return the booking document before the write plus the result.

    Owners accept, reject and complete bookings; either party may cancel.
    """

    repository = BookingRepository(session)
    booking = repository.get(booking_id)
    if booking is None:
        raise BookingNotFoundError(booking_id)

    if actor_id not in (booking.owner_id, booking.renter_id):
        raise PermissionError("Only the owner or the renter can update this booking")
    if status in OWNER_ONLY_STATUSES and actor_id != booking.owner_id:
        raise PermissionError(f"Only the owner can mark a booking as {status.value}")
    if status == BookingStatus.PENDING:
        raise ValueError("Bookings cannot be moved back to pending")

    before = booking.to_document()
    if booking.status == status:
        return before, booking

    (policy or get_status_policy()).ensure_allowed(booking.status, status)

    updated = repository.update_status(booking_id, status)
    logger.info(
        "Booking %s moved from %s to %s by %s",
        booking_id,
        booking.status.value,
        status.value,
        actor_id,
    )
    return before, updated
