"""Access to the mirrored equipment documents."""

from __future__ import annotations

from sqlalchemy.orm import Session

from app.domain.entities import Equipment
from app.infrastructure.models import EquipmentModel


class EquipmentRepository:
    """Look up equipment referenced by bookings."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, equipment_id: str) -> Equipment | None:
        model = self.session.get(EquipmentModel, equipment_id)
        if model is None:
            return None
        return Equipment(
            id=model.id,
            owner_id=model.owner_id,
            name=model.name,
            type=model.type,
        )

    def save(self, equipment: Equipment) -> Equipment:
        model = self.session.get(EquipmentModel, equipment.id) or EquipmentModel(id=equipment.id)
        model.owner_id = equipment.owner_id
        model.name = equipment.name
        model.type = equipment.type
        self.session.add(model)
        self.session.commit()
        return equipment


__all__ = ["EquipmentRepository"]
