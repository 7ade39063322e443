"""SQLAlchemy model for the user table."""

from sqlalchemy import Column, DateTime, Integer, String, func
from sqlalchemy.orm import relationship

from carecomm.infrastructure.database import Base

from .user_resident import user_resident_table


class UserModel(Base):
    """Database representation of a care-team member."""

    __tablename__ = "user"

    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String(80), nullable=False)
    last_name = Column(String(80), nullable=False)
    email = Column(String(120), nullable=False, index=True)
    mobile_number = Column(String(32), nullable=True)
    push_token = Column(String(255), nullable=True)
    user_type = Column(String(50), nullable=False, default="")
    created_at = Column(DateTime, nullable=False, server_default=func.now())

    residents = relationship(
        "ResidentModel",
        secondary=user_resident_table,
        back_populates="care_team",
    )
