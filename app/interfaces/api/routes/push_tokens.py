"""Endpoint used by devices to register their push token."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.application.use_cases.notifications import register_push_token as register_push_token_uc
from app.domain.errors import InvalidArgumentError, UnauthenticatedError
from app.infrastructure.database import get_db
from app.interfaces.api.dependencies import api_error, get_current_user_id
from app.interfaces.api.schemas import PushTokenRegister, SuccessResponse

router = APIRouter(prefix="/push-tokens", tags=["push-tokens"])


@router.post("", response_model=SuccessResponse)
def register_push_token(
    payload: PushTokenRegister,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """Store the caller's device token, replacing any previous one."""

    try:
        register_push_token_uc(db, user_id=user_id, token=payload.token)
    except UnauthenticatedError as exc:
        raise api_error(status.HTTP_401_UNAUTHORIZED, "unauthenticated", str(exc)) from exc
    except InvalidArgumentError as exc:
        raise api_error(status.HTTP_400_BAD_REQUEST, "invalid-argument", str(exc)) from exc
    return SuccessResponse(success=True)
