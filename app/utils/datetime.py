"""Helpers for working with timezone-aware datetimes."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""

    return datetime.now(tz=timezone.utc)


def ensure_utc(value: datetime | None) -> datetime | None:
    """Interpret naive values as UTC and convert aware ones to UTC."""

    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_naive_utc(value: datetime | None) -> datetime | None:
    """Return ``value`` in UTC without ``tzinfo`` for storage in ``DateTime`` columns."""

    normalized = ensure_utc(value)
    if normalized is None:
        return None
    return normalized.replace(tzinfo=None)


def parse_timestamp(value: Any) -> datetime:
    """Convert a document timestamp into an aware UTC datetime.

    Booking documents written by the mobile client carry epoch milliseconds,
    while documents replayed through the HTTP trigger usually carry ISO-8601
    strings. Both are accepted, as are ``datetime`` instances.
    """

    if isinstance(value, datetime):
        return ensure_utc(value)  # type: ignore[return-value]
    if isinstance(value, bool):
        raise ValueError(f"Unsupported timestamp value: {value!r}")
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as exc:
            raise ValueError(f"Timestamp out of range: {value!r}") from exc
    if isinstance(value, dict):
        # Serialized document-store timestamps: {"seconds": ..., "nanoseconds": ...}
        seconds = value.get("seconds", value.get("_seconds"))
        nanos = value.get("nanoseconds", value.get("_nanoseconds", 0)) or 0
        if isinstance(seconds, (int, float)) and not isinstance(seconds, bool):
            return parse_timestamp(seconds * 1000 + nanos / 1_000_000)
        raise ValueError(f"Unsupported timestamp value: {value!r}")
    if isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith("Z"):
            text = f"{text[:-1]}+00:00"
        try:
            return ensure_utc(datetime.fromisoformat(text))  # type: ignore[return-value]
        except ValueError as exc:
            raise ValueError(f"Invalid ISO-8601 timestamp: {value!r}") from exc
    raise ValueError(f"Unsupported timestamp value: {value!r}")


def now_naive_utc() -> datetime:
    """Return the current UTC time without ``tzinfo``, as stored by the database."""

    return utc_now().replace(tzinfo=None)
