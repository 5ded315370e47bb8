"""Display formatting shared by emails, notifications and calendar exports."""

from __future__ import annotations

from .datetime import parse_event_date

_MONTHS = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


def format_date(value: str) -> str:
    """Return ``value`` as a long US date, e.g. ``June 1, 2025``."""

    parsed = parse_event_date(value)
    return f"{_MONTHS[parsed.month - 1]} {parsed.day}, {parsed.year}"


def format_time(value: str) -> str:
    """Convert a 24-hour ``HH:MM`` string into ``h:MM AM/PM``."""

    hours, minutes = value.split(":")[:2]
    hour = int(hours)
    minute = int(minutes)
    suffix = "PM" if hour >= 12 else "AM"
    display_hour = hour % 12 or 12
    return f"{display_hour}:{minute:02d} {suffix}"


def truncate_text(text: str, limit: int = 100) -> str:
    """Trim ``text`` to ``limit`` characters, appending an ellipsis when cut."""

    if len(text) <= limit:
        return text
    return f"{text[:limit]}..."


__all__ = ["format_date", "format_time", "truncate_text"]
