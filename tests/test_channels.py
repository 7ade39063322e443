"""Tests for the notification channel flag helpers."""

from __future__ import annotations

import pytest

from carecomm.domain.entities import (
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


@pytest.mark.parametrize("value", range(1, 16))
def test_individual_channels_returns_exactly_the_members_present(value: int) -> None:
    channels = NotificationChannel(value)

    members = individual_channels(channels)

    assert set(members) == {channel for channel in ATOMIC_CHANNELS if value & channel}
    assert len(members) == len(set(members))
    assert NotificationChannel.NONE not in members
    assert NotificationChannel.ALL not in members


def test_individual_channels_of_none_is_empty() -> None:
    assert individual_channels(NotificationChannel.NONE) == ()


def test_all_decomposes_into_the_four_atomic_channels() -> None:
    assert individual_channels(NotificationChannel.ALL) == (
        NotificationChannel.SMS,
        NotificationChannel.PUSH,
        NotificationChannel.IVR,
        NotificationChannel.EMAIL,
    )


def test_enumeration_is_restartable() -> None:
    channels = NotificationChannel.SMS | NotificationChannel.EMAIL

    assert individual_channels(channels) == individual_channels(channels)


def test_union_and_intersection() -> None:
    sms_push = union_channels(NotificationChannel.SMS, NotificationChannel.PUSH)

    assert sms_push == NotificationChannel.SMS | NotificationChannel.PUSH
    assert intersect_channels(sms_push, NotificationChannel.PUSH | NotificationChannel.IVR) == (
        NotificationChannel.PUSH
    )
    assert intersect_channels(sms_push, NotificationChannel.EMAIL) == NotificationChannel.NONE


def test_contains_channel_only_accepts_atomic_members() -> None:
    channels = NotificationChannel.SMS | NotificationChannel.IVR

    assert contains_channel(channels, NotificationChannel.IVR)
    assert not contains_channel(channels, NotificationChannel.EMAIL)
    assert not contains_channel(NotificationChannel.ALL, NotificationChannel.ALL)
    assert not contains_channel(channels, NotificationChannel.NONE)


def test_coerce_channels_rejects_bits_outside_all() -> None:
    assert coerce_channels(15) == NotificationChannel.ALL
    with pytest.raises(ValueError):
        coerce_channels(16)
    with pytest.raises(ValueError):
        coerce_channels(-1)


def test_format_and_parse_channel_names() -> None:
    assert format_channels(NotificationChannel.SMS | NotificationChannel.EMAIL) == "SMS, Email"
    assert format_channels(NotificationChannel.NONE) == "None"
    assert parse_channel_name(" push ") == NotificationChannel.PUSH
    with pytest.raises(ValueError):
        parse_channel_name("fax")
