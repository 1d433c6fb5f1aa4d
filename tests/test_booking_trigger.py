"""Tests for the booking change trigger."""

from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor

import pytest

from app.application.use_cases.bookings import validate_booking
from app.application.use_cases.notifications import (
    NotificationDispatcher,
    RelatedEntityLoader,
    handle_booking_write,
)
from app.domain.errors import TransientError
from app.infrastructure import database
from app.infrastructure.repositories import (
    BookingRepository,
    NotificationClaimRepository,
    NotificationRepository,
    PushTokenRepository,
)
from app.domain.entities import Booking

from conftest import OWNER_ID, OWNER_TOKEN, RENTER_ID, RENTER_TOKEN


def _store(session, document, booking_id="b1") -> Booking:
    return BookingRepository(session).create(validate_booking(document, booking_id=booking_id))


def _trigger(session, push_client, before, after, booking_id="b1", **kwargs):
    kwargs.setdefault("dispatcher", NotificationDispatcher(session, push_client))
    return handle_booking_write(session, booking_id, before, after, **kwargs)


def test_creation_notifies_owner_and_sets_flag(directory, push_client, booking_document):
    session = directory
    booking = _store(session, booking_document())

    outcome = _trigger(session, push_client, None, booking.to_document())

    assert outcome.status == "notified"
    assert outcome.delivery.push_status == "sent"
    [notification] = NotificationRepository(session).list_for_user(OWNER_ID)
    assert notification.title == "New Booking Request"
    assert notification.message == "Jane has requested to book your Tractor X"
    assert notification.data["type"] == "booking_request"
    assert notification.data["bookingId"] == "b1"
    [message] = push_client.messages
    assert message.to == OWNER_TOKEN
    assert BookingRepository(session).get("b1").has_notified_creation is True


def test_acceptance_notifies_renter(directory, push_client, booking_document):
    session = directory
    _store(session, booking_document(status="accepted", hasNotifiedCreation=True))

    outcome = _trigger(
        session,
        push_client,
        booking_document(hasNotifiedCreation=True),
        booking_document(status="accepted", hasNotifiedCreation=True),
    )

    assert outcome.status == "notified"
    [notification] = NotificationRepository(session).list_for_user(RENTER_ID)
    assert notification.title == "Booking Status Update"
    assert notification.message == "Your booking for Tractor X has been confirmed."
    assert notification.data["type"] == "booking_confirmed"
    assert push_client.messages[0].to == RENTER_TOKEN
    assert BookingRepository(session).get("b1").has_notified_status_change is True


def test_redelivered_event_notifies_once(directory, push_client, booking_document):
    session = directory
    _store(session, booking_document())
    after = booking_document()

    first = _trigger(session, push_client, None, after)
    second = _trigger(session, push_client, None, after)

    assert first.status == "notified"
    assert second.status == "duplicate"
    assert NotificationRepository(session).count_for_user(OWNER_ID) == 1
    assert len(push_client.messages) == 1


def test_concurrent_redeliveries_notify_once(directory, push_client, booking_document):
    _store(directory, booking_document())
    after = booking_document()
    workers = 8
    barrier = threading.Barrier(workers)

    def invoke(_):
        session = database.SessionLocal()
        try:
            barrier.wait(timeout=5)
            return _trigger(session, push_client, None, after).status
        finally:
            session.close()

    with ThreadPoolExecutor(max_workers=workers) as executor:
        statuses = list(executor.map(invoke, range(workers)))

    assert statuses.count("notified") == 1
    assert statuses.count("duplicate") == workers - 1
    assert NotificationRepository(directory).count_for_user(OWNER_ID) == 1
    assert len(push_client.messages) == 1


def test_snapshot_with_flag_set_is_already_notified(directory, push_client, booking_document):
    outcome = _trigger(directory, push_client, None, booking_document(hasNotifiedCreation=True))

    assert outcome.status == "already_notified"
    assert NotificationRepository(directory).count_for_user(OWNER_ID) == 0


def test_flag_write_does_not_loop(directory, push_client, booking_document):
    session = directory
    _store(session, booking_document())
    _trigger(session, push_client, None, booking_document())

    # The flag update made by the first invocation is itself a booking write.
    outcome = _trigger(
        session,
        push_client,
        booking_document(),
        BookingRepository(session).get_document("b1"),
    )

    assert outcome.status == "noop"
    assert NotificationRepository(session).count_for_user(OWNER_ID) == 1
    assert len(push_client.messages) == 1


@pytest.mark.parametrize("status", ["rejected", "completed"])
def test_non_notifying_status_marks_flag_without_notification(
    directory, push_client, booking_document, status
):
    session = directory
    before_status = "pending" if status == "rejected" else "accepted"
    _store(session, booking_document(status=status))

    outcome = _trigger(
        session,
        push_client,
        booking_document(status=before_status),
        booking_document(status=status),
    )

    assert outcome.status == "skipped"
    assert NotificationRepository(session).count_for_user(RENTER_ID) == 0
    assert push_client.batches == []
    assert BookingRepository(session).get("b1").has_notified_status_change is True


def test_missing_related_entities_use_fallbacks(session, push_client, booking_document):
    PushTokenRepository(session).upsert(OWNER_ID, OWNER_TOKEN)

    outcome = _trigger(session, push_client, None, booking_document())

    assert outcome.status == "notified"
    [notification] = NotificationRepository(session).list_for_user(OWNER_ID)
    assert notification.message == "Someone has requested to book your equipment"


def test_missing_push_token_still_stores_notification(session, push_client, booking_document):
    outcome = _trigger(session, push_client, None, booking_document())

    assert outcome.status == "notified"
    assert outcome.delivery.push_status == "skipped"
    assert NotificationRepository(session).count_for_user(OWNER_ID) == 1
    assert push_client.batches == []


def test_invalid_document_is_rejected(directory, push_client, booking_document):
    outcome = _trigger(
        directory,
        push_client,
        None,
        booking_document(startDate="2026-05-03T00:00:00Z", endDate="2026-05-01T00:00:00Z"),
    )

    assert outcome.status == "invalid"
    assert outcome.step == "validate"
    assert NotificationRepository(directory).count_for_user(OWNER_ID) == 0


@pytest.mark.parametrize("price", [float("nan"), float("inf")])
def test_non_finite_price_is_rejected(directory, push_client, booking_document, price):
    outcome = _trigger(directory, push_client, None, booking_document(totalPrice=price))

    assert outcome.status == "invalid"
    assert NotificationRepository(directory).count_for_user(OWNER_ID) == 0
    assert push_client.batches == []


def test_deleted_booking_is_ignored(session, push_client, booking_document):
    outcome = _trigger(session, push_client, booking_document(), None)

    assert outcome.status == "deleted"
    assert push_client.batches == []


def test_empty_document_is_missing_data(session, push_client, caplog):
    with caplog.at_level(logging.ERROR):
        outcome = _trigger(session, push_client, None, {})

    assert outcome.status == "missing_data"
    assert "booking=b1" in caplog.text


def test_transient_failure_releases_claim(directory, push_client, booking_document):
    session = directory
    _store(session, booking_document())

    class UnavailableLoader:
        def load(self, booking):
            raise TransientError("lookup timed out")

    failed = _trigger(session, push_client, None, booking_document(), loader=UnavailableLoader())

    assert failed.status == "retryable_error"
    assert failed.retryable is True
    assert failed.step == "fetch_related"
    assert NotificationClaimRepository(session).exists("b1", "creation") is False
    assert BookingRepository(session).get("b1").has_notified_creation is False

    retried = _trigger(session, push_client, None, booking_document())

    assert retried.status == "notified"
    assert NotificationRepository(session).count_for_user(OWNER_ID) == 1


def test_unexpected_error_is_contained(directory, push_client, booking_document, caplog):
    class BrokenDispatcher:
        def dispatch(self, *args, **kwargs):
            raise RuntimeError("boom")

    with caplog.at_level(logging.ERROR):
        outcome = _trigger(
            directory, push_client, None, booking_document(), dispatcher=BrokenDispatcher()
        )

    assert outcome.status == "failed"
    assert outcome.step == "dispatch"
    assert "booking=b1 step=dispatch" in caplog.text


def test_out_of_policy_transition_is_logged_and_processed(
    directory, push_client, booking_document, caplog
):
    with caplog.at_level(logging.WARNING):
        outcome = _trigger(
            directory,
            push_client,
            booking_document(status="cancelled"),
            booking_document(status="accepted"),
        )

    assert outcome.status == "notified"
    assert "from 'cancelled' to 'accepted' is not allowed" in caplog.text


def test_loader_times_out(booking_document):
    def slow_session():
        time.sleep(0.5)
        return database.SessionLocal()

    loader = RelatedEntityLoader(slow_session, timeout=0.05)

    with pytest.raises(TransientError):
        loader.load(validate_booking(booking_document(), booking_id="b1"))


def test_loader_lookups_share_one_deadline(booking_document):
    delays = iter([0.2, 0.5])
    lock = threading.Lock()

    def staggered_session():
        with lock:
            delay = next(delays)
        time.sleep(delay)
        return database.SessionLocal()

    loader = RelatedEntityLoader(staggered_session, timeout=0.35)
    started = time.monotonic()

    with pytest.raises(TransientError):
        loader.load(validate_booking(booking_document(), booking_id="b1"))
    assert time.monotonic() - started < 0.5


def test_loader_fetches_equipment_and_requester(directory, booking_document):
    loader = RelatedEntityLoader(database.SessionLocal, timeout=5)

    related = loader.load(validate_booking(booking_document(), booking_id="b1"))

    assert related.equipment.name == "Tractor X"
    assert related.requester.display_name == "Jane"
