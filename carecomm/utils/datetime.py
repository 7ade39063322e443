"""Application clock used for quiet hours and audit timestamps.

Quiet hours are stored as wall-clock times without a zone, so they are always
compared against the facility clock configured through ``APP_TIMEZONE``. Audit
rows are stored as naive datetimes expressed in that same clock.
"""

from __future__ import annotations

import re
from datetime import datetime, time, timedelta, timezone, tzinfo
from functools import lru_cache
from typing import Final

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from carecomm.config import get_settings

_DEFAULT_TIMEZONE: Final[str] = "UTC"
_OFFSET_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^(?:UTC|GMT)(?P<sign>[+-])(?P<hours>\d{1,2})(?::?(?P<minutes>\d{2}))?$",
    re.IGNORECASE,
)


@lru_cache(maxsize=1)
def get_app_timezone() -> tzinfo:
    """Return the facility clock, falling back to UTC for unknown names."""

    configured = (get_settings().app_timezone or "").strip()
    return resolve_timezone(configured or _DEFAULT_TIMEZONE)


def resolve_timezone(name: str) -> tzinfo:
    """Resolve an IANA name or a ``UTC+05:30`` style offset."""

    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        offset = _parse_utc_offset(name)
    return offset if offset is not None else timezone.utc


def now_in_app_timezone() -> datetime:
    return datetime.now(tz=get_app_timezone())


def now_in_app_naive_datetime() -> datetime:
    """Current facility time as stored in ``DateTime`` columns."""

    return now_in_app_timezone().replace(tzinfo=None)


def now_in_app_time_of_day() -> time:
    """Current facility wall-clock time, comparable with quiet-hour bounds."""

    return now_in_app_timezone().time()


def ensure_app_timezone(value: datetime | None) -> datetime | None:
    """Attach the facility clock to naive values and convert aware ones."""

    if value is None:
        return None
    zone = get_app_timezone()
    if value.tzinfo is None:
        return value.replace(tzinfo=zone)
    return value.astimezone(zone)


def ensure_app_naive_datetime(value: datetime | None) -> datetime | None:
    localized = ensure_app_timezone(value)
    return localized.replace(tzinfo=None) if localized is not None else None


def _parse_utc_offset(name: str) -> tzinfo | None:
    match = _OFFSET_PATTERN.match(name)
    if match is None:
        return None
    offset = timedelta(
        hours=int(match.group("hours")), minutes=int(match.group("minutes") or 0)
    )
    if match.group("sign") == "-":
        offset = -offset
    return timezone(offset)
