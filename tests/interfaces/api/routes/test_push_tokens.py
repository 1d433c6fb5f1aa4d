"""Tests for push token registration."""

from app.infrastructure.repositories import PushTokenRepository


def test_requires_authentication(client):
    response = client.post("/push-tokens", json={"token": "ExponentPushToken[abc]"})

    assert response.status_code == 401
    assert response.json()["detail"]["status"] == "unauthenticated"


def test_rejects_invalid_bearer_token(client):
    response = client.post(
        "/push-tokens",
        json={"token": "ExponentPushToken[abc]"},
        headers={"Authorization": "Bearer not-a-jwt"},
    )

    assert response.status_code == 401


def test_requires_a_token(client, auth_headers):
    response = client.post("/push-tokens", json={}, headers=auth_headers("renter-1"))

    assert response.status_code == 400
    assert response.json()["detail"] == {
        "status": "invalid-argument",
        "message": "Token is required",
    }


def test_registration_replaces_previous_token(client, auth_headers, session):
    headers = auth_headers("renter-1")

    first = client.post("/push-tokens", json={"token": "ExponentPushToken[old]"}, headers=headers)
    second = client.post("/push-tokens", json={"token": "ExponentPushToken[new]"}, headers=headers)

    assert first.json() == {"success": True}
    assert second.json() == {"success": True}
    stored = PushTokenRepository(session).get("renter-1")
    assert stored.token == "ExponentPushToken[new]"
    assert stored.timestamp is not None
