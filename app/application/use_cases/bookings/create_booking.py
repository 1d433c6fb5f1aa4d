"""Use case for creating booking requests."""

from __future__ import annotations

import logging
import uuid
from datetime import datetime

from sqlalchemy.orm import Session

from app.domain.entities import Booking, BookingStatus
from app.infrastructure.repositories import BookingRepository, EquipmentRepository
from app.utils import utc_now

from .validators import validate_booking

logger = logging.getLogger(__name__)


def create_booking(
    session: Session,
    *,
    renter_id: str,
    equipment_id: str,
    start_date: datetime,
    end_date: datetime,
    total_price: float,
    listing_id: str | None = None,
    owner_id: str | None = None,
) -> Booking:
    """Store a new ``pending`` booking requested by ``renter_id``.

    The owner is taken from the equipment document when it exists; callers
    booking equipment that is not mirrored locally must pass ``owner_id``.
    """

    equipment = EquipmentRepository(session).get(equipment_id)
    resolved_owner_id = (equipment.owner_id if equipment else None) or owner_id
    if not resolved_owner_id:
        raise ValueError("The equipment owner could not be determined")
    if owner_id and resolved_owner_id != owner_id:
        raise ValueError("ownerId does not match the equipment owner")
    if resolved_owner_id == renter_id:
        raise ValueError("Owners cannot book their own equipment")

    document = {
        "equipmentId": equipment_id,
        "listingId": listing_id,
        "renterId": renter_id,
        "ownerId": resolved_owner_id,
        "startDate": start_date,
        "endDate": end_date,
        "totalPrice": total_price,
        "bookingDate": utc_now(),
        "status": BookingStatus.PENDING.value,
        "equipmentName": equipment.name if equipment else None,
    }
    booking = validate_booking(document, booking_id=uuid.uuid4().hex)

    saved = BookingRepository(session).create(booking)
    logger.info(
        "Booking %s requested by renter=%s for equipment=%s",
        saved.id,
        renter_id,
        equipment_id,
    )
    return saved
