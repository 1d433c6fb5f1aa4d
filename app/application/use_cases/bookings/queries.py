"""Read use cases for bookings."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.domain.entities import Booking
from app.domain.errors import BookingNotFoundError
from app.infrastructure.repositories import BookingRepository


def get_booking(session: Session, *, booking_id: str, viewer_id: str) -> Booking:
    """Return ``booking_id`` when ``viewer_id`` takes part in it."""

    booking = BookingRepository(session).get(booking_id)
    if booking is None or viewer_id not in (booking.owner_id, booking.renter_id):
        raise BookingNotFoundError(booking_id)
    return booking


def list_bookings(
    session: Session, *, user_id: str, role: str = "renter", limit: int | None = 50
) -> Sequence[Booking]:
    """Return the bookings where ``user_id`` is the renter or the owner."""

    if role not in {"renter", "owner"}:
        raise ValueError("role must be 'renter' or 'owner'")
    return BookingRepository(session).list_for_user(user_id, role=role, limit=limit)
