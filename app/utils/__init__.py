"""Utility helpers for reusable functionality."""

from .datetime import (
    ensure_utc,
    now_naive_utc,
    parse_timestamp,
    to_naive_utc,
    utc_now,
)

__all__ = [
    "ensure_utc",
    "now_naive_utc",
    "parse_timestamp",
    "to_naive_utc",
    "utc_now",
]
