"""FastAPI dependency utilities."""

from __future__ import annotations

import hmac

from fastapi import Depends, Header, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.application.use_cases.notifications import NotificationDispatcher
from app.application.use_cases.notifications.dispatcher import PushClient
from app.config import get_settings
from app.infrastructure.database import get_db
from app.infrastructure.push import get_push_client
from app.infrastructure.security import decode_access_token

bearer_scheme = HTTPBearer(auto_error=False)


def api_error(status_code: int, kind: str, message: str, **headers: str) -> HTTPException:
    """Build an ``HTTPException`` carrying the structured error body."""

    return HTTPException(
        status_code=status_code,
        detail={"status": kind, "message": message},
        headers=headers or None,
    )


def _unauthenticated(message: str) -> HTTPException:
    return api_error(
        status.HTTP_401_UNAUTHORIZED,
        "unauthenticated",
        message,
        **{"WWW-Authenticate": "Bearer"},
    )


def resolve_user_id(token: str) -> str:
    """Return the user id carried by ``token``."""

    try:
        payload = decode_access_token(token)
    except ValueError as exc:
        raise _unauthenticated("Invalid credentials") from exc

    user_id = payload.get("sub")
    if not isinstance(user_id, str) or not user_id.strip():
        raise _unauthenticated("Invalid credentials")
    return user_id.strip()


def get_current_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> str:
    """Return the id of the authenticated caller."""

    if credentials is None or not credentials.credentials:
        raise _unauthenticated("User must be authenticated")
    return resolve_user_id(credentials.credentials)


def get_push_relay_client() -> PushClient:
    """Return the push relay client. Tests override this dependency."""

    return get_push_client()


def get_notification_dispatcher(
    db: Session = Depends(get_db),
    push_client: PushClient = Depends(get_push_relay_client),
) -> NotificationDispatcher:
    return NotificationDispatcher(
        db, push_client, batch_size=get_settings().push_batch_size
    )


def verify_trigger_secret(
    x_trigger_secret: str | None = Header(default=None),
) -> None:
    """Reject trigger deliveries without the shared secret when one is configured."""

    expected = get_settings().trigger_secret
    if not expected:
        return
    if not x_trigger_secret or not hmac.compare_digest(x_trigger_secret, expected):
        raise api_error(status.HTTP_403_FORBIDDEN, "permission-denied", "Invalid trigger secret")
