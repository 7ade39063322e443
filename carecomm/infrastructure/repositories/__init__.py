"""Repository implementations for infrastructure layer."""

from .facility_repository import FacilityRepository
from .notification_repository import NotificationRepository
from .resident_repository import ResidentRepository
from .user_repository import UserRepository

__all__ = [
    "FacilityRepository",
    "NotificationRepository",
    "ResidentRepository",
    "UserRepository",
]
