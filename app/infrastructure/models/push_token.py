"""SQLAlchemy model for registered push tokens."""

from sqlalchemy import Column, DateTime, String

from app.infrastructure.database import Base


class PushTokenModel(Base):
    """Current push delivery address of a user, keyed by user id."""

    __tablename__ = "push_token"

    user_id = Column(String(64), primary_key=True)
    token = Column(String(255), nullable=False)
    timestamp = Column(DateTime, nullable=False)


__all__ = ["PushTokenModel"]
