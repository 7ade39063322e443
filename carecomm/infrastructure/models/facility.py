"""SQLAlchemy model for care facilities."""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from carecomm.infrastructure.database import Base


class FacilityModel(Base):
    """Database representation of a facility."""

    __tablename__ = "facility"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(150), nullable=False)
    address = Column(String(255), nullable=True)
    city = Column(String(100), nullable=True)
    state = Column(String(50), nullable=True)
    zip_code = Column(String(20), nullable=True)

    residents = relationship("ResidentModel", back_populates="facility")


__all__ = ["FacilityModel"]
