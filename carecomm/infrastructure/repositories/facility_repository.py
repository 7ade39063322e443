"""Persistence layer for facilities."""

from __future__ import annotations

from sqlalchemy.orm import Session

from carecomm.domain.entities import Facility
from carecomm.infrastructure.models import FacilityModel


class FacilityRepository:
    """Provide lookups for facility entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, facility_id: int) -> Facility | None:
        model = self.session.get(FacilityModel, facility_id)
        return self.to_entity(model) if model else None

    def create(self, facility: Facility) -> Facility:
        model = FacilityModel(
            name=facility.name,
            address=facility.address,
            city=facility.city,
            state=facility.state,
            zip_code=facility.zip_code,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self.to_entity(model)

    @staticmethod
    def to_entity(model: FacilityModel) -> Facility:
        return Facility(
            id=model.id,
            name=model.name,
            address=model.address,
            city=model.city,
            state=model.state,
            zip_code=model.zip_code,
        )


__all__ = ["FacilityRepository"]
