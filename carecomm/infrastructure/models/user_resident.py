"""Association table linking users to the residents they care for."""

from sqlalchemy import Column, ForeignKey, Integer, Table

from carecomm.infrastructure.database import Base

user_resident_table = Table(
    "user_resident",
    Base.metadata,
    Column("user_id", Integer, ForeignKey("user.id", ondelete="CASCADE"), primary_key=True),
    Column(
        "resident_id",
        Integer,
        ForeignKey("resident.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


__all__ = ["user_resident_table"]
