"""SQLAlchemy model for the notification idempotency keys."""

from sqlalchemy import Column, DateTime, Integer, String, UniqueConstraint

from app.infrastructure.database import Base


class NotificationClaimModel(Base):
    """One row per (booking, lifecycle event kind) that has been claimed."""

    __tablename__ = "notification_claim"
    __table_args__ = (
        UniqueConstraint("booking_id", "kind", name="uq_notification_claim_booking_kind"),
    )

    id = Column(Integer, primary_key=True, index=True)
    booking_id = Column(String(64), nullable=False, index=True)
    kind = Column(String(32), nullable=False)
    claimed_at = Column(DateTime, nullable=False)


__all__ = ["NotificationClaimModel"]
