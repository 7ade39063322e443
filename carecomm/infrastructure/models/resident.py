"""SQLAlchemy model for residents."""

from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from carecomm.infrastructure.database import Base

from .user_resident import user_resident_table


class ResidentModel(Base):
    """Database representation of a resident."""

    __tablename__ = "resident"

    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String(80), nullable=False)
    last_name = Column(String(80), nullable=False)
    facility_id = Column(Integer, ForeignKey("facility.id"), nullable=False, index=True)

    facility = relationship("FacilityModel", back_populates="residents", lazy="joined")
    care_team = relationship(
        "UserModel",
        secondary=user_resident_table,
        back_populates="residents",
    )


__all__ = ["ResidentModel"]
