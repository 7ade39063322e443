"""Persistence layer for residents."""

from __future__ import annotations

from sqlalchemy.orm import Session, joinedload

from carecomm.domain.entities import Resident
from carecomm.infrastructure.models import ResidentModel

from .facility_repository import FacilityRepository


class ResidentRepository:
    """Provide lookups for resident entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, resident_id: int) -> Resident | None:
        model = (
            self.session.query(ResidentModel)
            .options(joinedload(ResidentModel.facility))
            .filter(ResidentModel.id == resident_id)
            .first()
        )
        return self._to_entity(model) if model else None

    def create(self, resident: Resident) -> Resident:
        model = ResidentModel(
            first_name=resident.first_name,
            last_name=resident.last_name,
            facility_id=resident.facility_id,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: ResidentModel) -> Resident:
        return Resident(
            id=model.id,
            first_name=model.first_name,
            last_name=model.last_name,
            facility_id=model.facility_id,
            facility=FacilityRepository.to_entity(model.facility)
            if model.facility is not None
            else None,
        )


__all__ = ["ResidentRepository"]
