"""Domain entity describing a piece of equipment offered for rent."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Equipment:
    """Read-only view of an equipment document."""

    id: str
    owner_id: str | None
    name: str | None
    type: str | None = None


__all__ = ["Equipment"]
