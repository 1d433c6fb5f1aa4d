"""Webhook receiving booking writes from the change stream."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.application.use_cases.notifications import (
    NotificationDispatcher,
    handle_booking_write,
)
from app.infrastructure.database import SessionLocal, get_db
from app.interfaces.api.dependencies import get_notification_dispatcher, verify_trigger_secret
from app.interfaces.api.schemas import BookingChangeEvent, TriggerResult

router = APIRouter(
    prefix="/triggers",
    tags=["triggers"],
    dependencies=[Depends(verify_trigger_secret)],
)


@router.post("/bookings", response_model=TriggerResult)
def booking_written(
    event: BookingChangeEvent,
    db: Session = Depends(get_db),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
):
    """Process one booking write. Failures are reported in the body, never as errors."""

    outcome = handle_booking_write(
        db,
        event.booking_id,
        event.before,
        event.after,
        dispatcher=dispatcher,
        session_factory=SessionLocal,
    )
    return TriggerResult.model_validate(outcome.to_dict())
