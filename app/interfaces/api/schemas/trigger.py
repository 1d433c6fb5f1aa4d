"""Pydantic models for booking change deliveries."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class BookingChangeEvent(BaseModel):
    """One booking write as delivered by the change stream."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    booking_id: str = Field(..., min_length=1)
    before: dict[str, Any] | None = None
    after: dict[str, Any] | None = None


class TriggerResult(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    booking_id: str
    outcome: str
    event: str | None = None
    step: str | None = None
    detail: str | None = None
    notification_id: int | None = None
    push_status: str | None = None
