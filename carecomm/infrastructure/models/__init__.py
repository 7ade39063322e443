"""ORM models used by the application infrastructure."""

from .facility import FacilityModel
from .notification import NotificationModel, NotificationSubscriptionModel
from .resident import ResidentModel
from .user import UserModel
from .user_resident import user_resident_table

__all__ = [
    "FacilityModel",
    "NotificationModel",
    "NotificationSubscriptionModel",
    "ResidentModel",
    "UserModel",
    "user_resident_table",
]
