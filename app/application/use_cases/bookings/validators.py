"""Validation of raw booking documents into :class:`Booking` entities."""

from __future__ import annotations

import math
from collections.abc import Mapping
from numbers import Real
from typing import Any

from app.domain.entities import Booking, BookingStatus
from app.domain.errors import BookingValidationError
from app.utils import parse_timestamp

REQUIRED_REFERENCE_FIELDS = ("ownerId", "renterId", "equipmentId")


def validate_booking(raw: Mapping[str, Any], booking_id: str | None = None) -> Booking:
    """Return the :class:`Booking` described by ``raw`` or raise ``BookingValidationError``.

    ``raw`` uses the camelCase document shape written by clients. The function
    has no side effects.
    """

    if not isinstance(raw, Mapping):
        raise BookingValidationError("Booking document must be a mapping")

    references = {
        field: _required_identifier(raw.get(field), field)
        for field in REQUIRED_REFERENCE_FIELDS
    }

    start_date = _required_timestamp(raw.get("startDate"), "startDate")
    end_date = _required_timestamp(raw.get("endDate"), "endDate")
    if start_date >= end_date:
        raise BookingValidationError("startDate must be before endDate", field="startDate")

    total_price = raw.get("totalPrice")
    if isinstance(total_price, bool) or not isinstance(total_price, Real):
        raise BookingValidationError("totalPrice must be a number", field="totalPrice")
    if not math.isfinite(total_price):
        raise BookingValidationError("totalPrice must be finite", field="totalPrice")
    if total_price <= 0:
        raise BookingValidationError("totalPrice must be positive", field="totalPrice")

    raw_status = raw.get("status") or BookingStatus.PENDING.value
    try:
        status = BookingStatus(raw_status)
    except ValueError as exc:
        raise BookingValidationError(
            f"Unknown booking status: {raw_status!r}", field="status"
        ) from exc

    raw_booking_date = raw.get("bookingDate", raw.get("createdAt"))
    booking_date = (
        _required_timestamp(raw_booking_date, "bookingDate")
        if raw_booking_date is not None
        else None
    )

    identifier = booking_id if booking_id is not None else raw.get("id")
    listing_id = raw.get("listingId")
    equipment_name = raw.get("equipmentName")

    return Booking(
        id=str(identifier) if identifier is not None else None,
        equipment_id=references["equipmentId"],
        listing_id=str(listing_id) if listing_id not in (None, "") else None,
        renter_id=references["renterId"],
        owner_id=references["ownerId"],
        start_date=start_date,
        end_date=end_date,
        total_price=float(total_price),
        booking_date=booking_date,
        status=status,
        has_notified_creation=raw.get("hasNotifiedCreation") is True,
        has_notified_status_change=raw.get("hasNotifiedStatusChange") is True,
        equipment_name=_optional_text(equipment_name),
    )


def _required_identifier(value: Any, field: str) -> str:
    text = str(value).strip() if value is not None else ""
    if not text:
        raise BookingValidationError(f"Missing required field: {field}", field=field)
    return text


def _optional_text(value: Any) -> str | None:
    if not isinstance(value, str):
        return None
    return value.strip() or None


def _required_timestamp(value: Any, field: str):
    if value is None:
        raise BookingValidationError(f"Missing required field: {field}", field=field)
    try:
        return parse_timestamp(value)
    except ValueError as exc:
        raise BookingValidationError(f"Invalid {field}: {exc}", field=field) from exc


__all__ = ["REQUIRED_REFERENCE_FIELDS", "validate_booking"]
