"""Tests for booking document validation."""

from datetime import datetime, timezone

import pytest

from app.application.use_cases.bookings import validate_booking
from app.domain.entities import BookingStatus
from app.domain.errors import BookingValidationError


def test_valid_document_is_converted(booking_document):
    booking = validate_booking(booking_document(equipmentName=" Tractor X "), booking_id="b1")

    assert booking.id == "b1"
    assert booking.owner_id == "owner-1"
    assert booking.renter_id == "renter-1"
    assert booking.status is BookingStatus.PENDING
    assert booking.start_date == datetime(2026, 5, 1, 8, 0, tzinfo=timezone.utc)
    assert booking.total_price == 450.0
    assert booking.equipment_name == "Tractor X"
    assert booking.has_notified_creation is False


@pytest.mark.parametrize("field", ["ownerId", "renterId", "equipmentId"])
@pytest.mark.parametrize("value", [None, "", "   "])
def test_missing_reference_is_rejected(booking_document, field, value):
    with pytest.raises(BookingValidationError) as exc_info:
        validate_booking(booking_document(**{field: value}))

    assert exc_info.value.field == field


@pytest.mark.parametrize(
    ("start", "end"),
    [
        ("2026-05-03T00:00:00Z", "2026-05-01T00:00:00Z"),
        ("2026-05-01T00:00:00Z", "2026-05-01T00:00:00Z"),
    ],
)
def test_start_date_must_precede_end_date(booking_document, start, end):
    with pytest.raises(BookingValidationError, match="startDate must be before endDate"):
        validate_booking(booking_document(startDate=start, endDate=end))


@pytest.mark.parametrize("price", [0, -10, "100", None, True, float("nan"), float("inf")])
def test_total_price_must_be_a_positive_number(booking_document, price):
    with pytest.raises(BookingValidationError) as exc_info:
        validate_booking(booking_document(totalPrice=price))

    assert exc_info.value.field == "totalPrice"


def test_unknown_status_is_rejected(booking_document):
    with pytest.raises(BookingValidationError, match="Unknown booking status"):
        validate_booking(booking_document(status="archived"))


def test_missing_status_defaults_to_pending(booking_document):
    document = booking_document()
    del document["status"]

    assert validate_booking(document).status is BookingStatus.PENDING


def test_epoch_millisecond_dates_are_accepted(booking_document):
    start = int(datetime(2026, 5, 1, tzinfo=timezone.utc).timestamp() * 1000)
    end = int(datetime(2026, 5, 2, tzinfo=timezone.utc).timestamp() * 1000)

    booking = validate_booking(booking_document(startDate=start, endDate=end))

    assert booking.start_date == datetime(2026, 5, 1, tzinfo=timezone.utc)
    assert booking.end_date == datetime(2026, 5, 2, tzinfo=timezone.utc)


def test_unparseable_date_is_rejected(booking_document):
    with pytest.raises(BookingValidationError) as exc_info:
        validate_booking(booking_document(endDate="next tuesday"))

    assert exc_info.value.field == "endDate"


def test_created_at_is_used_when_booking_date_is_absent(booking_document):
    document = booking_document(createdAt="2026-04-19T09:30:00Z")
    del document["bookingDate"]

    booking = validate_booking(document)

    assert booking.booking_date == datetime(2026, 4, 19, 9, 30, tzinfo=timezone.utc)


def test_notification_flags_require_true(booking_document):
    booking = validate_booking(
        booking_document(hasNotifiedCreation="yes", hasNotifiedStatusChange=True)
    )

    assert booking.has_notified_creation is False
    assert booking.has_notified_status_change is True
