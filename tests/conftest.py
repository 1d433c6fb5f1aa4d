"""Shared fixtures for the test suite.

Environment variables are set before anything under ``app`` is imported, so
the engine created at import time points at a throwaway SQLite file.
"""

from __future__ import annotations

import os
import sys
import tempfile
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

TEST_DB_PATH = Path(tempfile.gettempdir()) / f"booking-notifications-test-{os.getpid()}.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["TRIGGER_SECRET"] = ""
os.environ["BOOKING_STATUS_POLICY"] = "strict"
os.environ["PUSH_MAX_RETRIES"] = "0"

from app.config import get_settings  # noqa: E402

get_settings.cache_clear()

from app.domain.entities import Equipment, User  # noqa: E402
from app.infrastructure import database  # noqa: E402
from app.infrastructure.push import PushTicket  # noqa: E402
from app.infrastructure.repositories import (  # noqa: E402
    EquipmentRepository,
    PushTokenRepository,
    UserRepository,
)
from app.infrastructure.security import create_access_token  # noqa: E402

OWNER_ID = "owner-1"
RENTER_ID = "renter-1"
EQUIPMENT_ID = "tractor-1"
OWNER_TOKEN = "ExponentPushToken[owner-device]"
RENTER_TOKEN = "ExponentPushToken[renter-device]"


class FakePushClient:
    """Stand-in for the relay client that records every batch it receives."""

    def __init__(self) -> None:
        self.batches: list[list] = []
        self.error: Exception | None = None
        self.tickets: list[PushTicket] | None = None

    @property
    def messages(self) -> list:
        return [message for batch in self.batches for message in batch]

    def send(self, messages):
        self.batches.append(list(messages))
        if self.error is not None:
            raise self.error
        if self.tickets is not None:
            return list(self.tickets)
        offset = len(self.messages) - len(messages)
        return [
            PushTicket(status="ok", id=f"ticket-{offset + index}")
            for index in range(len(messages))
        ]


@pytest.fixture(autouse=True)
def clean_database():
    database.Base.metadata.drop_all(bind=database.engine, checkfirst=True)
    database.Base.metadata.create_all(bind=database.engine)
    yield
    database.engine.dispose()


@pytest.fixture(scope="session", autouse=True)
def remove_database_file():
    yield
    database.engine.dispose()
    if TEST_DB_PATH.exists():
        TEST_DB_PATH.unlink()


@pytest.fixture()
def session():
    db = database.SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def push_client() -> FakePushClient:
    return FakePushClient()


@pytest.fixture()
def directory(session):
    """Seed an owner, a renter with a name, a tractor and both push tokens."""

    UserRepository(session).save(User(id=OWNER_ID, name="Olga Owner", email="olga@example.com"))
    UserRepository(session).save(User(id=RENTER_ID, name="Jane", email="jane@example.com"))
    EquipmentRepository(session).save(
        Equipment(id=EQUIPMENT_ID, owner_id=OWNER_ID, name="Tractor X", type="tractor")
    )
    tokens = PushTokenRepository(session)
    tokens.upsert(OWNER_ID, OWNER_TOKEN)
    tokens.upsert(RENTER_ID, RENTER_TOKEN)
    return session


@pytest.fixture()
def booking_document():
    """Return a factory for valid booking documents in the change-stream shape."""

    def factory(**overrides):
        document = {
            "equipmentId": EQUIPMENT_ID,
            "listingId": "listing-1",
            "renterId": RENTER_ID,
            "ownerId": OWNER_ID,
            "startDate": "2026-05-01T08:00:00Z",
            "endDate": "2026-05-03T18:00:00Z",
            "totalPrice": 450.0,
            "bookingDate": "2026-04-20T10:00:00Z",
            "status": "pending",
            "hasNotifiedCreation": False,
            "hasNotifiedStatusChange": False,
        }
        document.update(overrides)
        return document

    return factory


@pytest.fixture()
def auth_headers():
    def factory(user_id: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token({'sub': user_id})}"}

    return factory


@pytest.fixture()
def client(push_client):
    from fastapi.testclient import TestClient

    from app.interfaces.api.dependencies import get_push_relay_client
    from main import create_app

    app = create_app()
    app.dependency_overrides[get_push_relay_client] = lambda: push_client
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
