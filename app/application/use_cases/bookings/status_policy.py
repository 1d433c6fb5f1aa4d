"""Allowed booking status transitions."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from app.config import get_settings
from app.domain.entities import BookingStatus
from app.domain.errors import InvalidStatusTransitionError

DEFAULT_TRANSITIONS: Mapping[BookingStatus, frozenset[BookingStatus]] = {
    BookingStatus.PENDING: frozenset(
        {BookingStatus.ACCEPTED, BookingStatus.REJECTED, BookingStatus.CANCELLED}
    ),
    BookingStatus.ACCEPTED: frozenset({BookingStatus.COMPLETED, BookingStatus.CANCELLED}),
    BookingStatus.REJECTED: frozenset(),
    BookingStatus.COMPLETED: frozenset(),
    BookingStatus.CANCELLED: frozenset(),
}


@dataclass(frozen=True)
class StatusTransitionPolicy:
    """Transition table checked before and after status writes.

    A permissive policy accepts every transition, matching the behaviour of
    clients that overwrite the status directly.
    """

    transitions: Mapping[BookingStatus, frozenset[BookingStatus]] = field(
        default_factory=lambda: dict(DEFAULT_TRANSITIONS)
    )
    permissive: bool = False

    def is_allowed(self, old_status: str | BookingStatus | None, new_status: BookingStatus) -> bool:
        if self.permissive:
            return True
        try:
            current = BookingStatus(old_status)
        except ValueError:
            return False
        return new_status in self.transitions.get(current, frozenset())

    def ensure_allowed(self, old_status: str | BookingStatus | None, new_status: BookingStatus) -> None:
        if not self.is_allowed(old_status, new_status):
            raise InvalidStatusTransitionError(
                getattr(old_status, "value", old_status) or "", new_status.value
            )


def get_status_policy() -> StatusTransitionPolicy:
    """Return the policy selected by ``BOOKING_STATUS_POLICY``."""

    return StatusTransitionPolicy(
        permissive=get_settings().booking_status_policy == "permissive"
    )


__all__ = ["DEFAULT_TRANSITIONS", "StatusTransitionPolicy", "get_status_policy"]
