"""Domain entity describing how a user wants to be notified."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import time

from .channel import NotificationChannel
from .priority import NotificationPriority


@dataclass
class UserNotificationPreferences:
    """Per-user channel switches, quiet hours and urgency threshold."""

    user_id: int
    sms_enabled: bool = True
    push_enabled: bool = True
    ivr_enabled: bool = False
    email_enabled: bool = True
    quiet_hours_start: time | None = None
    quiet_hours_end: time | None = None
    minimum_urgent_priority: NotificationPriority = NotificationPriority.HIGH

    def enabled_channels(self) -> NotificationChannel:
        """Return the union of the channels this user accepts."""

        channels = NotificationChannel.NONE
        if self.sms_enabled:
            channels |= NotificationChannel.SMS
        if self.push_enabled:
            channels |= NotificationChannel.PUSH
        if self.ivr_enabled:
            channels |= NotificationChannel.IVR
        if self.email_enabled:
            channels |= NotificationChannel.EMAIL
        return channels

    def is_in_quiet_hours(self, now: time) -> bool:
        """Return ``True`` when ``now`` falls inside the configured quiet window."""

        if self.quiet_hours_start is None or self.quiet_hours_end is None:
            return False

        # Bounds are wall-clock times on the facility clock; offsets are ignored.
        start = self.quiet_hours_start.replace(tzinfo=None)
        end = self.quiet_hours_end.replace(tzinfo=None)
        now = now.replace(tzinfo=None)

        # Overnight window, e.g. 22:00 to 06:00
        if start > end:
            return now >= start or now <= end
        return start <= now < end

    def should_send_now(self, priority: NotificationPriority, now: time) -> bool:
        """Decide whether a ``priority`` message may be delivered at ``now``."""

        if priority.is_at_least_as_urgent_as(self.minimum_urgent_priority):
            return True
        return not self.is_in_quiet_hours(now)


__all__ = ["UserNotificationPreferences"]
