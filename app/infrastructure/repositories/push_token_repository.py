"""Persistence helpers for push token records."""

from __future__ import annotations

from sqlalchemy.orm import Session

from app.domain.entities import PushToken
from app.infrastructure.models import PushTokenModel
from app.utils import ensure_utc, now_naive_utc


class PushTokenRepository:
    """Read and upsert the single push token stored per user."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: str) -> PushToken | None:
        model = self.session.get(PushTokenModel, user_id)
        if model is None:
            return None
        return PushToken(
            user_id=model.user_id,
            token=model.token,
            timestamp=ensure_utc(model.timestamp),
        )

    def upsert(self, user_id: str, token: str) -> PushToken:
        """Replace the stored token of ``user_id`` entirely."""

        model = self.session.get(PushTokenModel, user_id)
        if model is None:
            model = PushTokenModel(user_id=user_id)
        model.token = token
        model.timestamp = now_naive_utc()
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return PushToken(
            user_id=model.user_id,
            token=model.token,
            timestamp=ensure_utc(model.timestamp),
        )

    def delete_if_matches(self, user_id: str, token: str) -> bool:
        """Remove the record only while it still holds ``token``."""

        deleted = (
            self.session.query(PushTokenModel)
            .filter(PushTokenModel.user_id == user_id, PushTokenModel.token == token)
            .delete(synchronize_session=False)
        )
        self.session.commit()
        return bool(deleted)


__all__ = ["PushTokenRepository"]
