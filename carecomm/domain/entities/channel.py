"""Delivery channel flags and set helpers."""

from __future__ import annotations

from enum import IntFlag


class NotificationChannel(IntFlag):
    """Delivery channels; values combine into a set of channels."""

    NONE = 0
    SMS = 1
    PUSH = 2
    IVR = 4
    EMAIL = 8
    ALL = SMS | PUSH | IVR | EMAIL

    @property
    def label(self) -> str:
        return _LABELS.get(self, self.name or str(int(self)))


ATOMIC_CHANNELS: tuple[NotificationChannel, ...] = (
    NotificationChannel.SMS,
    NotificationChannel.PUSH,
    NotificationChannel.IVR,
    NotificationChannel.EMAIL,
)

_LABELS = {
    NotificationChannel.NONE: "None",
    NotificationChannel.SMS: "SMS",
    NotificationChannel.PUSH: "Push",
    NotificationChannel.IVR: "IVR",
    NotificationChannel.EMAIL: "Email",
    NotificationChannel.ALL: "All",
}


def union_channels(
    first: NotificationChannel, second: NotificationChannel
) -> NotificationChannel:
    return NotificationChannel(first | second)


def intersect_channels(
    first: NotificationChannel, second: NotificationChannel
) -> NotificationChannel:
    return NotificationChannel(first & second)


def contains_channel(
    channels: NotificationChannel, channel: NotificationChannel
) -> bool:
    """Return ``True`` when the atomic ``channel`` is part of ``channels``."""

    if channel not in ATOMIC_CHANNELS:
        return False
    return bool(channels & channel)


def individual_channels(channels: NotificationChannel) -> tuple[NotificationChannel, ...]:
    """Decompose ``channels`` into its atomic members.

    ``NONE`` and ``ALL`` are never emitted; ``ALL`` decomposes into the four
    atomic channels.
    """

    return tuple(channel for channel in ATOMIC_CHANNELS if channels & channel)


def format_channels(channels: NotificationChannel) -> str:
    """Return a readable representation such as ``"SMS, Email"``."""

    members = individual_channels(channels)
    if not members:
        return NotificationChannel.NONE.label
    return ", ".join(channel.label for channel in members)


def coerce_channels(value: int | NotificationChannel) -> NotificationChannel:
    """Return ``value`` as a channel set, rejecting bits outside ``ALL``."""

    raw = int(value)
    if raw < 0 or raw & ~int(NotificationChannel.ALL):
        raise ValueError(f"Invalid notification channel set: {raw}")
    return NotificationChannel(raw)


def parse_channel_name(name: str) -> NotificationChannel:
    """Resolve a channel name (``"sms"``, ``"Push"``, ``"ALL"``) into a flag."""

    normalized = name.strip().upper()
    try:
        return NotificationChannel[normalized]
    except KeyError as exc:
        raise ValueError(f"Unknown notification channel: {name}") from exc


__all__ = [
    "ATOMIC_CHANNELS",
    "NotificationChannel",
    "coerce_channels",
    "contains_channel",
    "format_channels",
    "individual_channels",
    "intersect_channels",
    "parse_channel_name",
    "union_channels",
]
