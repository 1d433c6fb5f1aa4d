"""SQLAlchemy model for the equipment table."""

from sqlalchemy import Column, String

from app.infrastructure.database import Base


class EquipmentModel(Base):
    """Database representation of an equipment document."""

    __tablename__ = "equipment"

    id = Column(String(64), primary_key=True)
    owner_id = Column(String(64), nullable=True, index=True)
    name = Column(String(120), nullable=True)
    type = Column(String(60), nullable=True)


__all__ = ["EquipmentModel"]
