"""Domain entities for persisted notification audit rows."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from .priority import NotificationPriority


@dataclass
class NotificationRecord:
    """Durable record of a notification, kept for care-history tracking."""

    id: int | None
    message: str
    priority: NotificationPriority
    facility_id: int
    created_at: datetime | None = None
    external_id: UUID | None = None


@dataclass
class NotificationSubscription:
    """Links a user to a notification record they authored or follow."""

    id: int | None
    user_id: int
    notification_id: int


__all__ = ["NotificationRecord", "NotificationSubscription"]
