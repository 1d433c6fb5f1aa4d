"""Domain entity describing the current push delivery address of a user."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class PushToken:
    """Single push token registered by a user's device."""

    user_id: str
    token: str
    timestamp: datetime | None = None


__all__ = ["PushToken"]
