"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from carecomm.domain.entities import (
    BatchResult,
    ChannelResult,
    NotificationChannel,
    NotificationPriority,
    NotificationRecord,
    coerce_channels,
    parse_channel_name,
    union_channels,
)


def _parse_priority(value: Any) -> NotificationPriority:
    try:
        return NotificationPriority.parse(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid notification priority: {value}") from exc


def _parse_channels(value: Any) -> NotificationChannel:
    if value is None:
        return NotificationChannel.ALL
    if isinstance(value, bool):
        raise ValueError("Channels must be a flag value or a list of channel names")
    if isinstance(value, int):
        return coerce_channels(value)
    if isinstance(value, str):
        return parse_channel_name(value)
    if isinstance(value, (list, tuple, set)):
        channels = NotificationChannel.NONE
        for item in value:
            channels = union_channels(channels, _parse_channels(item))
        return channels
    raise ValueError("Channels must be a flag value or a list of channel names")


class _PriorityPayload(BaseModel):
    message: str = Field(..., min_length=1, description="Notification text")
    priority: NotificationPriority = Field(
        ..., description="Priority ordinal (0-4) or name (GENERAL, INCIDENT, HIGH, MEDIUM, LOW)"
    )

    @field_validator("priority", mode="before")
    @classmethod
    def _validate_priority(cls, value: Any) -> NotificationPriority:
        return _parse_priority(value)


class _ChannelsPayload(_PriorityPayload):
    channels: NotificationChannel = Field(
        default=NotificationChannel.ALL,
        description="Channel flag value or list of channel names",
    )

    @field_validator("channels", mode="before")
    @classmethod
    def _validate_channels(cls, value: Any) -> NotificationChannel:
        return _parse_channels(value)


class CareTeamNotificationCreate(_ChannelsPayload):
    """Payload for notifying the care team of a resident."""


class FacilityNotificationCreate(_ChannelsPayload):
    """Payload for a facility-wide alert."""


class DirectNotificationCreate(_ChannelsPayload):
    """Payload for a single addressed notification."""

    recipients: list[str] = Field(default_factory=list)
    about_resident_id: int | None = None
    facility_id: int | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)


class ResidentNoteCreate(_PriorityPayload):
    """Payload for recording a note a user wrote about a resident."""

    user_id: int


class ChannelResultRead(BaseModel):
    is_success: bool
    channel: str
    message: str
    external_id: str | None = None
    sent_at: datetime
    error_code: str | None = None

    @classmethod
    def from_entity(cls, result: ChannelResult) -> "ChannelResultRead":
        return cls(
            is_success=result.is_success,
            channel=result.channel.label,
            message=result.message,
            external_id=result.external_id,
            sent_at=result.sent_at,
            error_code=result.error_code,
        )


class BatchResultRead(BaseModel):
    """Aggregated outcome returned by dispatch endpoints."""

    results: list[ChannelResultRead] = Field(default_factory=list)
    total_sent: int
    total_failed: int
    all_successful: bool

    @classmethod
    def from_entity(cls, batch: BatchResult) -> "BatchResultRead":
        return cls(
            results=[ChannelResultRead.from_entity(result) for result in batch.results],
            total_sent=batch.total_sent,
            total_failed=batch.total_failed,
            all_successful=batch.all_successful,
        )


class NotificationRecordRead(BaseModel):
    id: int
    external_id: UUID | None = None
    message: str
    priority: int
    priority_name: str
    facility_id: int
    created_at: datetime | None = None

    @classmethod
    def from_entity(cls, record: NotificationRecord) -> "NotificationRecordRead":
        return cls(
            id=record.id or 0,
            external_id=record.external_id,
            message=record.message,
            priority=int(record.priority),
            priority_name=record.priority.name,
            facility_id=record.facility_id,
            created_at=record.created_at,
        )


class AvailableChannelsRead(BaseModel):
    channels: list[str]


__all__ = [
    "AvailableChannelsRead",
    "BatchResultRead",
    "CareTeamNotificationCreate",
    "ChannelResultRead",
    "DirectNotificationCreate",
    "FacilityNotificationCreate",
    "NotificationRecordRead",
    "ResidentNoteCreate",
]
