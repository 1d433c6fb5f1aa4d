"""Access to the mirrored user profiles."""

from __future__ import annotations

from sqlalchemy.orm import Session

from app.domain.entities import User
from app.infrastructure.models import UserModel


class UserRepository:
    """Look up the profiles of booking participants."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: str) -> User | None:
        model = self.session.get(UserModel, user_id)
        if model is None:
            return None
        return User(id=model.id, name=model.name, email=model.email)

    def save(self, user: User) -> User:
        """Insert or replace the mirrored profile of ``user``."""

        model = self.session.get(UserModel, user.id) or UserModel(id=user.id)
        model.name = user.name
        model.email = user.email
        self.session.add(model)
        self.session.commit()
        return User(id=model.id, name=model.name, email=model.email)


__all__ = ["UserRepository"]
