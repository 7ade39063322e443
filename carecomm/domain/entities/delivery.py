"""Transient value objects used while dispatching notifications."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any

from .channel import NotificationChannel
from .priority import NotificationPriority

PROVIDER_NOT_AVAILABLE = "PROVIDER_NOT_AVAILABLE"
PROVIDER_NOT_CONFIGURED = "PROVIDER_NOT_CONFIGURED"
INVALID_RECIPIENT = "INVALID_RECIPIENT"
NO_RECIPIENTS = "NO_RECIPIENTS"


@dataclass(frozen=True)
class NotificationRequest:
    """A message addressed to one recipient over a set of channels."""

    message: str
    priority: NotificationPriority
    channels: NotificationChannel
    recipients: tuple[str, ...] = ()
    about_resident_id: int | None = None
    facility_id: int | None = None
    metadata: Mapping[str, Any] = field(default_factory=dict)
    channel_recipients: Mapping[NotificationChannel, tuple[str, ...]] = field(
        default_factory=dict
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "recipients", tuple(self.recipients))
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))
        object.__setattr__(
            self,
            "channel_recipients",
            MappingProxyType(
                {
                    NotificationChannel(channel): tuple(addresses)
                    for channel, addresses in self.channel_recipients.items()
                }
            ),
        )

    def recipients_for(self, channel: NotificationChannel) -> tuple[str, ...]:
        """Return the addresses to use for ``channel``."""

        addresses = self.channel_recipients.get(channel)
        if addresses is not None:
            return addresses
        return self.recipients


@dataclass
class ChannelResult:
    """Outcome of a single delivery attempt over one channel."""

    is_success: bool
    channel: NotificationChannel
    message: str
    external_id: str | None = None
    sent_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    error_code: str | None = None

    @classmethod
    def success(
        cls,
        channel: NotificationChannel,
        message: str,
        *,
        external_id: str | None = None,
    ) -> "ChannelResult":
        return cls(is_success=True, channel=channel, message=message, external_id=external_id)

    @classmethod
    def failure(
        cls, channel: NotificationChannel, message: str, *, error_code: str
    ) -> "ChannelResult":
        return cls(is_success=False, channel=channel, message=message, error_code=error_code)


@dataclass
class BatchResult:
    """Ordered collection of channel results gathered during a dispatch."""

    results: list[ChannelResult] = field(default_factory=list)

    @property
    def total_sent(self) -> int:
        return sum(1 for result in self.results if result.is_success)

    @property
    def total_failed(self) -> int:
        return sum(1 for result in self.results if not result.is_success)

    @property
    def all_successful(self) -> bool:
        return all(result.is_success for result in self.results)

    def add(self, result: ChannelResult) -> None:
        self.results.append(result)

    def extend(self, other: "BatchResult | Iterable[ChannelResult]") -> None:
        items = other.results if isinstance(other, BatchResult) else other
        self.results.extend(items)


__all__ = [
    "BatchResult",
    "ChannelResult",
    "INVALID_RECIPIENT",
    "NO_RECIPIENTS",
    "NotificationRequest",
    "PROVIDER_NOT_AVAILABLE",
    "PROVIDER_NOT_CONFIGURED",
]
