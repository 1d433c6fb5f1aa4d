"""Client for the Expo push notification relay."""

from __future__ import annotations

import json
import logging
import re
import time
from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass, field
from typing import Any

import httpx

from app.config import get_settings
from app.domain.errors import PushRelayError

logger = logging.getLogger(__name__)

_EXPO_TOKEN_PATTERN = re.compile(r"^Expo(?:nent)?PushToken\[.+\]$")
_UUID_TOKEN_PATTERN = re.compile(
    r"^[a-z\d]{8}-[a-z\d]{4}-[a-z\d]{4}-[a-z\d]{4}-[a-z\d]{12}$", re.IGNORECASE
)
_RETRYABLE_STATUS_CODES = frozenset({429, 500, 502, 503, 504})

TICKET_STATUS_OK = "ok"
TICKET_STATUS_ERROR = "error"
DEVICE_NOT_REGISTERED = "DeviceNotRegistered"


def is_expo_push_token(token: Any) -> bool:
    """Return ``True`` when ``token`` looks like an Expo push token."""

    if not isinstance(token, str):
        return False
    return bool(_EXPO_TOKEN_PATTERN.match(token) or _UUID_TOKEN_PATTERN.match(token))


@dataclass(frozen=True)
class PushMessage:
    """Single message in the relay wire format."""

    to: str
    title: str
    body: str
    data: dict[str, str] = field(default_factory=dict)
    sound: str = "default"

    def to_dict(self) -> dict[str, Any]:
        return {
            "to": self.to,
            "sound": self.sound,
            "title": self.title,
            "body": self.body,
            "data": dict(self.data),
        }


@dataclass(frozen=True)
class PushTicket:
    """Delivery ticket returned by the relay for one message."""

    status: str
    id: str | None = None
    message: str | None = None
    details: dict[str, Any] | None = None

    @property
    def is_error(self) -> bool:
        return self.status != TICKET_STATUS_OK

    @property
    def error_code(self) -> str | None:
        if not self.details:
            return None
        code = self.details.get("error")
        return str(code) if code else None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"status": self.status}
        if self.id is not None:
            payload["id"] = self.id
        if self.message is not None:
            payload["message"] = self.message
        if self.details is not None:
            payload["details"] = self.details
        return payload

    @classmethod
    def from_dict(cls, raw: Any) -> "PushTicket":
        if not isinstance(raw, dict):
            return cls(status=TICKET_STATUS_ERROR, message=f"Malformed ticket: {raw!r}")
        details = raw.get("details")
        return cls(
            status=str(raw.get("status") or TICKET_STATUS_ERROR),
            id=raw.get("id"),
            message=raw.get("message"),
            details=details if isinstance(details, dict) else None,
        )


def chunk_messages(
    messages: Sequence[PushMessage], size: int
) -> Iterator[list[PushMessage]]:
    """Yield consecutive slices of ``messages`` holding at most ``size`` items."""

    if size < 1:
        raise ValueError("Chunk size must be positive")
    for start in range(0, len(messages), size):
        yield list(messages[start : start + size])


def _extract_relay_error_details(body: Any) -> str | None:
    """Return a human readable description for a relay error payload."""

    if body in (None, ""):
        return None

    if isinstance(body, (bytes, str)):
        text = body.decode("utf-8", errors="replace") if isinstance(body, bytes) else body
        text = text.strip()
        if not text:
            return None
        try:
            body = json.loads(text)
        except json.JSONDecodeError:
            return text[:300]

    if isinstance(body, dict):
        errors = body.get("errors")
        if isinstance(errors, list):
            messages = [
                f"{item.get('code')}: {item.get('message')}"
                if item.get("code")
                else str(item.get("message"))
                for item in errors
                if isinstance(item, dict) and item.get("message")
            ]
            if messages:
                return "; ".join(messages)
        try:
            return json.dumps(body)[:300]
        except (TypeError, ValueError):
            return None

    return None


class ExpoPushClient:
    """Submit message batches to the Expo push relay.

    Timeouts, transport failures, ``429`` and ``5xx`` responses are retried
    with exponential backoff; once retries are exhausted a
    :class:`~app.domain.errors.PushRelayError` is raised.
    """

    def __init__(
        self,
        *,
        url: str,
        access_token: str | None = None,
        timeout: float = 10.0,
        max_retries: int = 3,
        backoff_seconds: float = 0.5,
        transport: httpx.BaseTransport | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.url = url
        self._access_token = access_token
        self._timeout = timeout
        self._max_retries = max_retries
        self._backoff_seconds = backoff_seconds
        self._transport = transport
        self._sleep = sleep

    def send(self, messages: Sequence[PushMessage]) -> list[PushTicket]:
        """Send one batch and return the relay tickets in message order."""

        if not messages:
            return []

        payload = [message.to_dict() for message in messages]
        attempt = 0
        while True:
            attempt += 1
            try:
                response = self._post(payload)
            except httpx.TimeoutException as exc:
                error = PushRelayError(f"Push relay timed out after {self._timeout}s")
                error.__cause__ = exc
            except httpx.TransportError as exc:
                error = PushRelayError(f"Push relay unreachable: {exc}")
                error.__cause__ = exc
            else:
                if response.status_code in _RETRYABLE_STATUS_CODES:
                    details = _extract_relay_error_details(response.content)
                    error = PushRelayError(
                        f"Push relay responded with status {response.status_code}"
                        + (f": {details}" if details else "")
                    )
                elif not 200 <= response.status_code < 300:
                    details = _extract_relay_error_details(response.content)
                    raise PushRelayError(
                        f"Push relay rejected the request with status {response.status_code}"
                        + (f": {details}" if details else "")
                    )
                else:
                    return self._parse_tickets(response, expected=len(messages))

            if attempt > self._max_retries:
                logger.error("Push relay request failed after %s attempts: %s", attempt, error)
                raise error

            delay = self._backoff_seconds * (2 ** (attempt - 1))
            logger.warning(
                "Push relay attempt %s/%s failed (%s); retrying in %.2fs",
                attempt,
                self._max_retries + 1,
                error,
                delay,
            )
            self._sleep(delay)

    def _post(self, payload: list[dict[str, Any]]) -> httpx.Response:
        headers = {
            "Accept": "application/json",
            "Accept-Encoding": "gzip, deflate",
            "Content-Type": "application/json",
        }
        if self._access_token:
            headers["Authorization"] = f"Bearer {self._access_token}"

        with httpx.Client(timeout=self._timeout, transport=self._transport) as client:
            return client.post(self.url, json=payload, headers=headers)

    @staticmethod
    def _parse_tickets(response: httpx.Response, *, expected: int) -> list[PushTicket]:
        try:
            body = response.json()
        except ValueError as exc:
            raise PushRelayError("Push relay returned a non-JSON body") from exc

        if isinstance(body, dict) and body.get("errors") and not body.get("data"):
            details = _extract_relay_error_details(body)
            raise PushRelayError(f"Push relay reported errors: {details}")

        raw_tickets = body.get("data") if isinstance(body, dict) else None
        if isinstance(raw_tickets, dict):
            raw_tickets = [raw_tickets]
        if not isinstance(raw_tickets, list):
            raise PushRelayError("Push relay response is missing the ticket list")

        tickets = [PushTicket.from_dict(item) for item in raw_tickets]
        if len(tickets) != expected:
            logger.warning(
                "Push relay returned %s tickets for %s messages", len(tickets), expected
            )
        return tickets


def get_push_client() -> ExpoPushClient:
    """Return a relay client configured from the application settings."""

    settings = get_settings()
    return ExpoPushClient(
        url=settings.expo_push_url,
        access_token=settings.expo_access_token,
        timeout=settings.push_timeout_seconds,
        max_retries=settings.push_max_retries,
        backoff_seconds=settings.push_retry_backoff_seconds,
    )


__all__ = [
    "DEVICE_NOT_REGISTERED",
    "ExpoPushClient",
    "PushMessage",
    "PushTicket",
    "TICKET_STATUS_ERROR",
    "TICKET_STATUS_OK",
    "chunk_messages",
    "get_push_client",
    "is_expo_push_token",
]
