"""Concurrent lookup of the entities referenced by a booking."""

from __future__ import annotations

import logging
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor, wait
from dataclasses import dataclass
from typing import TypeVar

from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from app.domain.entities import Booking, Equipment, User
from app.domain.errors import RelatedEntityNotFoundError, TransientError
from app.infrastructure.repositories import EquipmentRepository, UserRepository

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RelatedEntities:
    equipment: Equipment | None
    requester: User | None


class RelatedEntityLoader:
    """Fetch the equipment and the renter of a booking in parallel.

    Every lookup uses its own session and is bounded by ``timeout``. Missing
    documents are reported and returned as ``None``; timeouts and database
    connectivity errors raise :class:`TransientError`.
    """

    def __init__(self, session_factory: Callable[[], Session], *, timeout: float) -> None:
        self._session_factory = session_factory
        self._timeout = timeout

    def load(self, booking: Booking) -> RelatedEntities:
        executor = ThreadPoolExecutor(max_workers=2, thread_name_prefix="related-entity")
        try:
            equipment_future = executor.submit(
                self._fetch, lambda s: EquipmentRepository(s).get(booking.equipment_id)
            )
            requester_future = executor.submit(
                self._fetch, lambda s: UserRepository(s).get(booking.renter_id)
            )
            # Both lookups share one deadline.
            _, pending = wait([equipment_future, requester_future], timeout=self._timeout)
            if pending:
                raise TransientError(f"Related entity lookup exceeded {self._timeout}s")
            equipment = equipment_future.result()
            requester = requester_future.result()
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

        if equipment is None:
            logger.warning(
                "booking=%s: %s", booking.id, RelatedEntityNotFoundError("equipment", booking.equipment_id)
            )
        if requester is None:
            logger.warning(
                "booking=%s: %s", booking.id, RelatedEntityNotFoundError("user", booking.renter_id)
            )
        return RelatedEntities(equipment=equipment, requester=requester)

    def _fetch(self, query: Callable[[Session], T]) -> T:
        session = self._session_factory()
        try:
            return query(session)
        except OperationalError as exc:
            raise TransientError(f"Database unavailable: {exc}") from exc
        finally:
            session.close()


__all__ = ["RelatedEntities", "RelatedEntityLoader"]
