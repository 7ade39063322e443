"""Pydantic schemas for the HTTP interface."""

from .notification import (
    AvailableChannelsRead,
    BatchResultRead,
    CareTeamNotificationCreate,
    ChannelResultRead,
    DirectNotificationCreate,
    FacilityNotificationCreate,
    NotificationRecordRead,
    ResidentNoteCreate,
)
from .preferences import NotificationPreferencesRead, NotificationPreferencesUpdate

__all__ = [
    "AvailableChannelsRead",
    "BatchResultRead",
    "CareTeamNotificationCreate",
    "ChannelResultRead",
    "DirectNotificationCreate",
    "FacilityNotificationCreate",
    "NotificationPreferencesRead",
    "NotificationPreferencesUpdate",
    "NotificationRecordRead",
    "ResidentNoteCreate",
]
