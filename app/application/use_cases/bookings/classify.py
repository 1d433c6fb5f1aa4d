"""Classify booking writes into lifecycle events."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from app.domain.entities import (
    Booking,
    BookingStatus,
    BookingEvent,
    Created,
    Deleted,
    NoOp,
    StatusChanged,
)


def classify(
    before: Mapping[str, Any] | None,
    after: Booking | None,
    *,
    booking_id: str = "",
) -> BookingEvent:
    """Return the lifecycle event represented by a ``before``/``after`` pair.

    Only the ``status`` field is compared. Writes touching any other field,
    including the notification flags set after a delivery, are ``NoOp``.
    """

    if after is None:
        return Deleted(booking_id=booking_id)
    if before is None:
        return Created(booking=after)

    # Snapshots written before the status field existed are pending.
    old_status = before.get("status") or BookingStatus.PENDING.value
    if old_status != after.status.value:
        return StatusChanged(
            booking=after,
            old_status=str(old_status),
            new_status=after.status,
        )
    return NoOp(booking=after)


__all__ = ["classify"]
