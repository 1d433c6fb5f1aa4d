"""Endpoints for booking requests and their status changes."""

from __future__ import annotations

import logging
from typing import Literal

from fastapi import APIRouter, BackgroundTasks, Depends, Query, status
from sqlalchemy.orm import Session

from app.application.use_cases.bookings import (
    create_booking as create_booking_uc,
    get_booking as get_booking_uc,
    list_bookings as list_bookings_uc,
    update_booking_status as update_booking_status_uc,
)
from app.application.use_cases.notifications.dispatcher import PushClient
from app.domain.errors import (
    BookingNotFoundError,
    BookingValidationError,
    InvalidStatusTransitionError,
)
from app.infrastructure.database import get_db
from app.interfaces.api.dependencies import (
    api_error,
    get_current_user_id,
    get_push_relay_client,
)
from app.interfaces.api.schemas import BookingCreate, BookingRead, BookingStatusUpdate
from app.interfaces.api.tasks import run_booking_trigger

router = APIRouter(prefix="/bookings", tags=["bookings"])
logger = logging.getLogger(__name__)


@router.post("", response_model=BookingRead, status_code=status.HTTP_201_CREATED)
def create_booking(
    booking_in: BookingCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
    push_client: PushClient = Depends(get_push_relay_client),
):
    """Create a pending booking request for the authenticated renter."""

    try:
        booking = create_booking_uc(
            db,
            renter_id=user_id,
            equipment_id=booking_in.equipment_id,
            start_date=booking_in.start_date,
            end_date=booking_in.end_date,
            total_price=booking_in.total_price,
            listing_id=booking_in.listing_id,
            owner_id=booking_in.owner_id,
        )
    except ValueError as exc:
        raise api_error(status.HTTP_400_BAD_REQUEST, "invalid-argument", str(exc)) from exc

    background_tasks.add_task(
        run_booking_trigger, booking.id, None, booking.to_document(), push_client
    )
    return BookingRead.from_entity(booking)


@router.get("", response_model=list[BookingRead])
def list_bookings(
    role: Literal["renter", "owner"] = Query("renter"),
    limit: int = Query(50, ge=1, le=200),
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    bookings = list_bookings_uc(db, user_id=user_id, role=role, limit=limit)
    return [BookingRead.from_entity(booking) for booking in bookings]


@router.get("/{booking_id}", response_model=BookingRead)
def read_booking(
    booking_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    try:
        booking = get_booking_uc(db, booking_id=booking_id, viewer_id=user_id)
    except BookingNotFoundError as exc:
        raise api_error(status.HTTP_404_NOT_FOUND, "not-found", str(exc)) from exc
    return BookingRead.from_entity(booking)


@router.patch("/{booking_id}/status", response_model=BookingRead)
def update_booking_status(
    booking_id: str,
    payload: BookingStatusUpdate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
    push_client: PushClient = Depends(get_push_relay_client),
):
    """Accept, reject, complete or cancel a booking."""

    try:
        before, booking = update_booking_status_uc(
            db, booking_id=booking_id, actor_id=user_id, status=payload.status
        )
    except BookingNotFoundError as exc:
        raise api_error(status.HTTP_404_NOT_FOUND, "not-found", str(exc)) from exc
    except PermissionError as exc:
        raise api_error(status.HTTP_403_FORBIDDEN, "permission-denied", str(exc)) from exc
    except InvalidStatusTransitionError as exc:
        raise api_error(status.HTTP_409_CONFLICT, "failed-precondition", str(exc)) from exc
    except (BookingValidationError, ValueError) as exc:
        raise api_error(status.HTTP_400_BAD_REQUEST, "invalid-argument", str(exc)) from exc

    if before.get("status") != booking.status.value:
        background_tasks.add_task(
            run_booking_trigger, booking_id, before, booking.to_document(), push_client
        )
    return BookingRead.from_entity(booking)
