"""Pydantic models for push token registration."""

from __future__ import annotations

from pydantic import BaseModel


class PushTokenRegister(BaseModel):
    token: str | None = None


class SuccessResponse(BaseModel):
    success: bool = True
