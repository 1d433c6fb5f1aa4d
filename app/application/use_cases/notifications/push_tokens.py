"""Register the device push token of the calling user."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from app.domain.entities import PushToken
from app.domain.errors import InvalidArgumentError, UnauthenticatedError
from app.infrastructure.push import is_expo_push_token
from app.infrastructure.repositories import PushTokenRepository

logger = logging.getLogger(__name__)


def register_push_token(session: Session, *, user_id: str | None, token: str | None) -> PushToken:
    """Store ``token`` as the only push token of ``user_id``.

    Any previously registered token is replaced. Tokens that do not look like
    Expo push tokens are still stored; the dispatcher skips them at delivery
    time and logs a warning here.
    """

    if not user_id:
        raise UnauthenticatedError("User must be authenticated")
    cleaned = token.strip() if isinstance(token, str) else ""
    if not cleaned:
        raise InvalidArgumentError("Token is required")
    if not is_expo_push_token(cleaned):
        logger.warning("User %s registered a token that is not an Expo push token", user_id)

    record = PushTokenRepository(session).upsert(user_id, cleaned)
    logger.info("Push token registered for user %s", user_id)
    return record


__all__ = ["register_push_token"]
