"""SQLAlchemy models for notification audit records and subscriptions."""

from uuid import uuid4

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Text, Uuid
from sqlalchemy.orm import relationship

from carecomm.infrastructure.database import Base
from carecomm.utils import now_in_app_naive_datetime


class NotificationModel(Base):
    """Database representation of a dispatched or authored notification."""

    __tablename__ = "notification"

    id = Column(Integer, primary_key=True, index=True)
    external_id = Column(Uuid, nullable=False, default=uuid4, unique=True)
    message = Column(Text, nullable=False)
    # Stored as the priority ordinal; see NotificationPriority.
    priority = Column(Integer, nullable=False)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)
    facility_id = Column(Integer, ForeignKey("facility.id"), nullable=False, index=True)

    subscriptions = relationship(
        "NotificationSubscriptionModel",
        back_populates="notification",
        cascade="all, delete-orphan",
    )


class NotificationSubscriptionModel(Base):
    """Database representation of a user following a notification."""

    __tablename__ = "notification_subscription"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    notification_id = Column(
        Integer, ForeignKey("notification.id"), nullable=False, index=True
    )

    notification = relationship("NotificationModel", back_populates="subscriptions")


__all__ = ["NotificationModel", "NotificationSubscriptionModel"]
