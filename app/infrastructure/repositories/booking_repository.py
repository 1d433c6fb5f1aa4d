"""Persistence helpers for booking entities."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from sqlalchemy.orm import Session

from app.domain.entities import Booking, BookingStatus
from app.infrastructure.models import BookingModel
from app.utils import ensure_utc, to_naive_utc

NOTIFIED_CREATION_FIELD = "has_notified_creation"
NOTIFIED_STATUS_CHANGE_FIELD = "has_notified_status_change"
_NOTIFIED_FIELDS = {NOTIFIED_CREATION_FIELD, NOTIFIED_STATUS_CHANGE_FIELD}


class BookingRepository:
    """Provide CRUD operations for :class:`Booking` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, booking_id: str) -> Booking | None:
        model = self.session.get(BookingModel, booking_id)
        if model is None:
            return None
        return self._to_entity(model)

    def get_document(self, booking_id: str) -> dict[str, Any] | None:
        """Return the change-stream document shape of ``booking_id``."""

        booking = self.get(booking_id)
        return booking.to_document() if booking is not None else None

    def list_for_user(
        self,
        user_id: str,
        *,
        role: str = "renter",
        limit: int | None = 50,
    ) -> Sequence[Booking]:
        query = self.session.query(BookingModel)
        if role == "owner":
            query = query.filter(BookingModel.owner_id == user_id)
        else:
            query = query.filter(BookingModel.renter_id == user_id)
        query = query.order_by(BookingModel.booking_date.desc(), BookingModel.id.desc())
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def create(self, booking: Booking) -> Booking:
        if booking.id is None:
            raise ValueError("Booking id is required")
        model = BookingModel(id=booking.id)
        self._apply_entity_to_model(model, booking)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update_status(self, booking_id: str, status: BookingStatus) -> Booking:
        model = self.session.get(BookingModel, booking_id)
        if model is None:
            msg = f"Booking with id {booking_id} not found"
            raise ValueError(msg)
        model.status = status.value
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def set_notified_flag(self, booking_id: str, field: str) -> bool:
        """Set one idempotency flag to ``True``.

        Returns ``False`` when the booking no longer exists.
        """

        if field not in _NOTIFIED_FIELDS:
            raise ValueError(f"Unknown notification flag: {field}")
        updated = (
            self.session.query(BookingModel)
            .filter(BookingModel.id == booking_id)
            .update({getattr(BookingModel, field): True}, synchronize_session=False)
        )
        self.session.commit()
        return bool(updated)

    @staticmethod
    def _apply_entity_to_model(model: BookingModel, booking: Booking) -> None:
        model.equipment_id = booking.equipment_id
        model.listing_id = booking.listing_id
        model.renter_id = booking.renter_id
        model.owner_id = booking.owner_id
        model.start_date = to_naive_utc(booking.start_date)
        model.end_date = to_naive_utc(booking.end_date)
        model.total_price = booking.total_price
        if booking.booking_date is not None:
            model.booking_date = to_naive_utc(booking.booking_date)
        model.status = booking.status.value
        model.equipment_name = booking.equipment_name
        model.has_notified_creation = booking.has_notified_creation
        model.has_notified_status_change = booking.has_notified_status_change

    @staticmethod
    def _to_entity(model: BookingModel) -> Booking:
        return Booking(
            id=model.id,
            equipment_id=model.equipment_id,
            listing_id=model.listing_id,
            renter_id=model.renter_id,
            owner_id=model.owner_id,
            start_date=ensure_utc(model.start_date),
            end_date=ensure_utc(model.end_date),
            total_price=model.total_price,
            booking_date=ensure_utc(model.booking_date),
            status=BookingStatus(model.status),
            has_notified_creation=bool(model.has_notified_creation),
            has_notified_status_change=bool(model.has_notified_status_change),
            equipment_name=model.equipment_name,
        )


__all__ = [
    "BookingRepository",
    "NOTIFIED_CREATION_FIELD",
    "NOTIFIED_STATUS_CHANGE_FIELD",
]
