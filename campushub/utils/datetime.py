"""Helpers for working with event dates and timezone-aware datetimes."""

from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from functools import lru_cache
from typing import Final

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from campushub.config import get_settings

_DEFAULT_TIMEZONE: Final[str] = "UTC"
_OFFSET_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^(?:UTC|GMT)(?P<sign>[+-])(?P<hours>\d{1,2})(?::?(?P<minutes>\d{2}))?$",
    re.IGNORECASE,
)


@lru_cache(maxsize=1)
def get_app_timezone() -> tzinfo:
    """Return the configured application timezone.

    Resolved from ``APP_TIMEZONE``; names such as ``UTC+05:30`` are accepted
    as fixed offsets. Unknown values fall back to UTC.
    """

    settings = get_settings()
    tz_name = (settings.app_timezone or "").strip() or _DEFAULT_TIMEZONE
    return _resolve_timezone(tz_name)


def now_in_app_timezone() -> datetime:
    """Return the current time localized to the configured timezone."""

    return datetime.now(tz=get_app_timezone())


def now_in_app_naive_datetime() -> datetime:
    """Return the current localized time without attaching ``tzinfo``."""

    return now_in_app_timezone().replace(tzinfo=None)


def ensure_app_naive_datetime(value: datetime | None) -> datetime | None:
    """Return ``value`` localized to the app timezone but without ``tzinfo``."""

    if value is None:
        return None
    if value.tzinfo is None:
        return value
    return value.astimezone(get_app_timezone()).replace(tzinfo=None)


def parse_event_date(value: str) -> date:
    """Parse the date part of an ISO date or datetime string."""

    return date.fromisoformat(value.split("T", 1)[0].strip())


def parse_event_time(value: str | None) -> time:
    """Parse an ``HH:MM`` (or ``HH:MM:SS``) string, defaulting to midnight."""

    if not value:
        return time(0, 0)
    parts = value.strip().split(":")
    hours = int(parts[0])
    minutes = int(parts[1]) if len(parts) > 1 else 0
    seconds = int(parts[2]) if len(parts) > 2 else 0
    return time(hours, minutes, seconds)


def combine_event_datetime(event_date: str, event_time: str | None) -> datetime:
    """Return the naive local datetime at which an event starts."""

    return datetime.combine(parse_event_date(event_date), parse_event_time(event_time))


def is_event_past(event_date: str, event_time: str | None, *, now: datetime | None = None) -> bool:
    """Return ``True`` when the event start lies before ``now``."""

    reference = now or now_in_app_naive_datetime()
    return combine_event_datetime(event_date, event_time) < reference


def _resolve_timezone(tz_name: str) -> tzinfo:
    """Resolve ``tz_name`` into a ``timezone`` instance."""

    try:
        return ZoneInfo(tz_name)
    except ZoneInfoNotFoundError:
        match = _OFFSET_PATTERN.match(tz_name)
        if match:
            sign = -1 if match.group("sign") == "-" else 1
            hours = int(match.group("hours"))
            minutes = int(match.group("minutes") or 0)
            offset = timedelta(hours=hours, minutes=minutes)
            return timezone(sign * offset)
    return ZoneInfo(_DEFAULT_TIMEZONE)
