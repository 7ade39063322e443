"""Tests for the facility clock helpers."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from carecomm.utils import ensure_app_naive_datetime, resolve_timezone


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("UTC+05:30", timedelta(hours=5, minutes=30)),
        ("gmt-3", timedelta(hours=-3)),
        ("Not/AZone", timedelta(0)),
    ],
)
def test_resolve_timezone_offsets(name, expected) -> None:
    zone = resolve_timezone(name)

    assert zone.utcoffset(datetime(2024, 1, 1)) == expected


def test_resolve_timezone_accepts_iana_names() -> None:
    zone = resolve_timezone("America/Chicago")

    assert zone.utcoffset(datetime(2024, 1, 15)) == timedelta(hours=-6)


def test_ensure_app_naive_datetime_converts_to_app_clock() -> None:
    aware = datetime(2024, 3, 1, 12, 0, tzinfo=timezone(timedelta(hours=2)))

    assert ensure_app_naive_datetime(aware) == datetime(2024, 3, 1, 10, 0)
    assert ensure_app_naive_datetime(None) is None
