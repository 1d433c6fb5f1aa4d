"""Error kinds raised by the booking notification pipeline."""

from __future__ import annotations


class BookingValidationError(ValueError):
    """Raised when a booking document breaks the booking rules."""

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class InvalidStatusTransitionError(ValueError):
    """Raised when a status change is not allowed by the transition policy."""

    def __init__(self, old_status: str, new_status: str) -> None:
        super().__init__(
            f"Transition from '{old_status}' to '{new_status}' is not allowed"
        )
        self.old_status = old_status
        self.new_status = new_status


class BookingNotFoundError(LookupError):
    """Raised when a booking id does not resolve to a stored booking."""

    def __init__(self, booking_id: str) -> None:
        super().__init__(f"Booking '{booking_id}' not found")
        self.booking_id = booking_id


class RelatedEntityNotFoundError(LookupError):
    """Raised when an equipment or user document referenced by a booking is missing."""

    def __init__(self, kind: str, entity_id: str) -> None:
        super().__init__(f"{kind} '{entity_id}' not found")
        self.kind = kind
        self.entity_id = entity_id


class TransientError(RuntimeError):
    """Retryable I/O failure. The event should be left for redelivery."""


class PushRelayError(TransientError):
    """The push relay could not be reached or kept failing after retries."""


class DeliveryError(RuntimeError):
    """A push message was rejected for a specific recipient."""

    def __init__(self, recipient_id: str, message: str) -> None:
        super().__init__(f"Delivery to '{recipient_id}' failed: {message}")
        self.recipient_id = recipient_id


class UnauthenticatedError(PermissionError):
    """The callable entry point was invoked without a caller identity."""


class InvalidArgumentError(ValueError):
    """The callable entry point was invoked with missing or malformed arguments."""


__all__ = [
    "BookingNotFoundError",
    "BookingValidationError",
    "DeliveryError",
    "InvalidArgumentError",
    "InvalidStatusTransitionError",
    "PushRelayError",
    "RelatedEntityNotFoundError",
    "TransientError",
    "UnauthenticatedError",
]
