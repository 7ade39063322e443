"""Notification dispatch use cases."""

from .audit import NotificationAuditRecorder
from .create_notification_for_resident import create_notification_for_resident
from .dispatch import NotificationDispatcher, contact_addresses
from .hub import NotificationHub
from .preferences import NotificationPreferencesService, default_preferences_for
from .providers import build_providers, configure_providers

__all__ = [
    "NotificationAuditRecorder",
    "NotificationDispatcher",
    "NotificationHub",
    "NotificationPreferencesService",
    "build_providers",
    "configure_providers",
    "contact_addresses",
    "create_notification_for_resident",
    "default_preferences_for",
]
