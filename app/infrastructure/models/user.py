"""SQLAlchemy model for the user profile table."""

from sqlalchemy import Column, String

from app.infrastructure.database import Base


class UserModel(Base):
    """Database representation of a marketplace user profile."""

    __tablename__ = "user"

    id = Column(String(64), primary_key=True)
    name = Column(String(120), nullable=True)
    email = Column(String(120), nullable=True, index=True)


__all__ = ["UserModel"]
