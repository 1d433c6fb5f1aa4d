"""Lifecycle events derived from a before/after pair of booking snapshots."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .booking import Booking, BookingStatus


@dataclass(frozen=True)
class Deleted:
    """The booking document no longer exists."""

    booking_id: str


@dataclass(frozen=True)
class Created:
    """The booking document was written for the first time."""

    booking: Booking


@dataclass(frozen=True)
class StatusChanged:
    """The booking status differs between the two snapshots."""

    booking: Booking
    old_status: str | None
    new_status: BookingStatus


@dataclass(frozen=True)
class NoOp:
    """Both snapshots exist and the status is unchanged."""

    booking: Booking


BookingEvent = Union[Deleted, Created, StatusChanged, NoOp]


__all__ = ["BookingEvent", "Created", "Deleted", "NoOp", "StatusChanged"]
