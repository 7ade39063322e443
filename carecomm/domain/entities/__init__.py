"""Domain entities exposed by the application."""

from .channel import (
    ATOMIC_CHANNELS,
    NotificationChannel,
    coerce_channels,
    contains_channel,
    format_channels,
    individual_channels,
    intersect_channels,
    parse_channel_name,
    union_channels,
)
from .delivery import (
    INVALID_RECIPIENT,
    NO_RECIPIENTS,
    PROVIDER_NOT_AVAILABLE,
    PROVIDER_NOT_CONFIGURED,
    BatchResult,
    ChannelResult,
    NotificationRequest,
)
from .facility import Facility
from .notification import NotificationRecord, NotificationSubscription
from .preferences import UserNotificationPreferences
from .priority import NotificationPriority
from .resident import Resident
from .user import User

__all__ = [
    "ATOMIC_CHANNELS",
    "BatchResult",
    "ChannelResult",
    "Facility",
    "INVALID_RECIPIENT",
    "NO_RECIPIENTS",
    "NotificationChannel",
    "NotificationPriority",
    "NotificationRecord",
    "NotificationRequest",
    "NotificationSubscription",
    "PROVIDER_NOT_AVAILABLE",
    "PROVIDER_NOT_CONFIGURED",
    "Resident",
    "User",
    "UserNotificationPreferences",
    "coerce_channels",
    "contains_channel",
    "format_channels",
    "individual_channels",
    "intersect_channels",
    "parse_channel_name",
    "union_channels",
]
