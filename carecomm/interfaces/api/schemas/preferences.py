"""Pydantic models for notification preferences."""

from __future__ import annotations

from datetime import time
from typing import Any

from pydantic import BaseModel, Field, field_validator

from carecomm.domain.entities import (
    NotificationPriority,
    UserNotificationPreferences,
    individual_channels,
)


class NotificationPreferencesBase(BaseModel):
    sms_enabled: bool = True
    push_enabled: bool = True
    ivr_enabled: bool = False
    email_enabled: bool = True
    quiet_hours_start: time | None = None
    quiet_hours_end: time | None = None
    minimum_urgent_priority: NotificationPriority = Field(default=NotificationPriority.HIGH)

    @field_validator("minimum_urgent_priority", mode="before")
    @classmethod
    def _validate_priority(cls, value: Any) -> NotificationPriority:
        try:
            return NotificationPriority.parse(value)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Invalid notification priority: {value}") from exc


class NotificationPreferencesUpdate(NotificationPreferencesBase):
    """Replacement preferences for a user."""

    @field_validator("quiet_hours_start", "quiet_hours_end")
    @classmethod
    def _validate_wall_clock(cls, value: time | None) -> time | None:
        if value is not None and value.tzinfo is not None:
            raise ValueError("Quiet hours must be local wall-clock times without an offset")
        return value

    def to_entity(self, user_id: int) -> UserNotificationPreferences:
        return UserNotificationPreferences(
            user_id=user_id,
            sms_enabled=self.sms_enabled,
            push_enabled=self.push_enabled,
            ivr_enabled=self.ivr_enabled,
            email_enabled=self.email_enabled,
            quiet_hours_start=self.quiet_hours_start,
            quiet_hours_end=self.quiet_hours_end,
            minimum_urgent_priority=self.minimum_urgent_priority,
        )


class NotificationPreferencesRead(NotificationPreferencesBase):
    user_id: int
    enabled_channels: list[str]

    @classmethod
    def from_entity(
        cls, preferences: UserNotificationPreferences
    ) -> "NotificationPreferencesRead":
        return cls(
            user_id=preferences.user_id,
            sms_enabled=preferences.sms_enabled,
            push_enabled=preferences.push_enabled,
            ivr_enabled=preferences.ivr_enabled,
            email_enabled=preferences.email_enabled,
            quiet_hours_start=preferences.quiet_hours_start,
            quiet_hours_end=preferences.quiet_hours_end,
            minimum_urgent_priority=preferences.minimum_urgent_priority,
            enabled_channels=[
                channel.label for channel in individual_channels(preferences.enabled_channels())
            ],
        )


__all__ = ["NotificationPreferencesRead", "NotificationPreferencesUpdate"]
