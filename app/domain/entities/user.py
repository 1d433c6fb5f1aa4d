"""Domain entity representing a marketplace user profile."""

from dataclasses import dataclass


@dataclass(frozen=True)
class User:
    """Read-only profile attributes needed to address a user."""

    id: str
    name: str | None
    email: str | None = None

    @property
    def display_name(self) -> str | None:
        """Return the trimmed name, or ``None`` when it is blank."""

        if self.name is None:
            return None
        stripped = self.name.strip()
        return stripped or None


__all__ = ["User"]
