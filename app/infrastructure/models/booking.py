"""SQLAlchemy model for the booking table."""

from sqlalchemy import Boolean, Column, DateTime, Float, String
from sqlalchemy.sql import expression

from app.infrastructure.database import Base
from app.utils import now_naive_utc


class BookingModel(Base):
    """Database representation of a booking document."""

    __tablename__ = "booking"

    id = Column(String(64), primary_key=True)
    equipment_id = Column(String(64), nullable=False, index=True)
    listing_id = Column(String(64), nullable=True)
    renter_id = Column(String(64), nullable=False, index=True)
    owner_id = Column(String(64), nullable=False, index=True)
    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=False)
    total_price = Column(Float, nullable=False)
    booking_date = Column(DateTime, nullable=False, default=now_naive_utc)
    status = Column(String(20), nullable=False, default="pending")
    equipment_name = Column(String(120), nullable=True)
    has_notified_creation = Column(
        Boolean,
        nullable=False,
        default=False,
        server_default=expression.false(),
    )
    has_notified_status_change = Column(
        Boolean,
        nullable=False,
        default=False,
        server_default=expression.false(),
    )


__all__ = ["BookingModel"]
