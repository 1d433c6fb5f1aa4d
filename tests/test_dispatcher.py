"""Tests for in-app persistence and push delivery."""

import pytest

from app.application.use_cases.notifications import NotificationDispatcher
from app.domain.entities import BookingRequestPayload
from app.domain.errors import PushRelayError
from app.infrastructure.push import PushMessage, PushTicket
from app.infrastructure.repositories import NotificationRepository, PushTokenRepository

PAYLOAD = BookingRequestPayload(
    booking_id="b1",
    equipment_id="tractor-1",
    equipment_name="Tractor X",
    renter_id="renter-1",
)


def test_dispatch_persists_and_pushes(session, push_client):
    PushTokenRepository(session).upsert("owner-1", "ExponentPushToken[abc]")

    result = NotificationDispatcher(session, push_client).dispatch(
        "owner-1", "New Booking Request", "Jane has requested to book your Tractor X", PAYLOAD
    )

    assert result.in_app_delivered is True
    assert result.push_status == "sent"
    assert [ticket.status for ticket in result.tickets] == ["ok"]

    [stored] = NotificationRepository(session).list_for_user("owner-1")
    assert stored.id == result.notification_id
    assert stored.read is False
    assert stored.data == PAYLOAD.to_wire()
    assert stored.timestamp is not None

    [message] = push_client.messages
    assert message.to_dict() == {
        "to": "ExponentPushToken[abc]",
        "sound": "default",
        "title": "New Booking Request",
        "body": "Jane has requested to book your Tractor X",
        "data": PAYLOAD.to_wire(),
    }


def test_missing_token_skips_push(session, push_client):
    result = NotificationDispatcher(session, push_client).dispatch("owner-1", "Title", "Body")

    assert result.in_app_delivered is True
    assert result.push_status == "skipped"
    assert push_client.batches == []
    assert NotificationRepository(session).count_for_user("owner-1") == 1


def test_invalid_token_is_not_sent(session, push_client):
    PushTokenRepository(session).upsert("owner-1", "not-a-push-token")

    result = NotificationDispatcher(session, push_client).dispatch("owner-1", "Title", "Body")

    assert result.push_status == "invalid_token"
    assert push_client.batches == []
    assert NotificationRepository(session).count_for_user("owner-1") == 1


def test_relay_failure_is_reported_not_raised(session, push_client):
    PushTokenRepository(session).upsert("owner-1", "ExpoPushToken[abc]")
    push_client.error = PushRelayError("relay down")

    result = NotificationDispatcher(session, push_client).dispatch("owner-1", "Title", "Body")

    assert result.in_app_delivered is True
    assert result.push_status == "failed"
    assert result.errors == ["relay down"]


def test_device_not_registered_removes_token(session, push_client):
    PushTokenRepository(session).upsert("owner-1", "ExponentPushToken[stale]")
    push_client.tickets = [
        PushTicket(
            status="error",
            message="The recipient device is not registered",
            details={"error": "DeviceNotRegistered"},
        )
    ]

    result = NotificationDispatcher(session, push_client).dispatch("owner-1", "Title", "Body")

    assert result.push_status == "failed"
    assert "owner-1" in result.errors[0]
    assert PushTokenRepository(session).get("owner-1") is None


def test_other_error_tickets_keep_the_token(session, push_client):
    PushTokenRepository(session).upsert("owner-1", "ExponentPushToken[abc]")
    push_client.tickets = [
        PushTicket(status="error", message="Too big", details={"error": "MessageTooBig"})
    ]

    result = NotificationDispatcher(session, push_client).dispatch("owner-1", "Title", "Body")

    assert result.push_status == "failed"
    assert PushTokenRepository(session).get("owner-1") is not None


def test_messages_are_sent_in_relay_sized_chunks(session, push_client):
    dispatcher = NotificationDispatcher(session, push_client, batch_size=2)
    messages = {
        f"user-{index}": PushMessage(to=f"ExponentPushToken[{index}]", title="T", body="B")
        for index in range(5)
    }

    tickets, errors = dispatcher.send_messages(messages)

    assert [len(batch) for batch in push_client.batches] == [2, 2, 1]
    assert len(tickets) == 5
    assert errors == []


def test_failed_chunk_does_not_stop_the_others(session, push_client):
    calls = []

    class FlakyClient:
        def send(self, messages):
            calls.append(len(messages))
            if len(calls) == 1:
                raise PushRelayError("first chunk failed")
            return [PushTicket(status="ok", id="t") for _ in messages]

    dispatcher = NotificationDispatcher(session, FlakyClient(), batch_size=1)
    messages = {
        "a": PushMessage(to="ExponentPushToken[a]", title="T", body="B"),
        "b": PushMessage(to="ExponentPushToken[b]", title="T", body="B"),
    }

    tickets, errors = dispatcher.send_messages(messages)

    assert calls == [1, 1]
    assert len(tickets) == 1
    assert errors == ["first chunk failed"]


@pytest.mark.parametrize("batch_size", [0, 101])
def test_batch_size_is_bounded(session, push_client, batch_size):
    with pytest.raises(ValueError):
        NotificationDispatcher(session, push_client, batch_size=batch_size)
