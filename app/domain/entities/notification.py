"""Domain entity representing a user notification."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class Notification:
    """In-app message delivered to a specific user."""

    id: int | None
    user_id: str
    title: str
    message: str
    data: dict[str, str] = field(default_factory=dict)
    timestamp: datetime | None = None
    read: bool = False


__all__ = ["Notification"]
