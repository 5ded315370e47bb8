"""Calendar export helpers (Google Calendar links and iCalendar files)."""

from __future__ import annotations

import re
import time as _time
from dataclasses import dataclass
from datetime import datetime, timedelta
from urllib.parse import urlencode

from .datetime import combine_event_datetime, now_in_app_naive_datetime

GOOGLE_CALENDAR_URL = "https://calendar.google.com/calendar/render"
DEFAULT_DURATION_HOURS = 2
_STAMP_FORMAT = "%Y%m%dT%H%M%S"


@dataclass(frozen=True)
class CalendarEvent:
    """Event data required by calendar integrations."""

    title: str
    description: str
    location: str
    start: datetime
    end: datetime


def create_calendar_event(
    *,
    title: str,
    date: str,
    time: str | None = None,
    description: str | None = None,
    venue: str | None = None,
    duration: float | None = None,
) -> CalendarEvent:
    """Build a :class:`CalendarEvent`, defaulting to a two hour slot."""

    start = combine_event_datetime(date, time or "00:00")
    end = start + timedelta(hours=duration or DEFAULT_DURATION_HOURS)
    return CalendarEvent(
        title=title,
        description=description or "",
        location=venue or "",
        start=start,
        end=end,
    )


def generate_google_calendar_url(event: CalendarEvent) -> str:
    """Return a Google Calendar deep link that pre-fills ``event``."""

    params = {
        "action": "TEMPLATE",
        "text": event.title,
        "details": event.description,
        "location": event.location,
        "dates": f"{event.start.strftime(_STAMP_FORMAT)}/{event.end.strftime(_STAMP_FORMAT)}",
    }
    return f"{GOOGLE_CALENDAR_URL}?{urlencode(params)}"


def _escape_text(value: str) -> str:
    return (
        value.replace("\\", "\\\\")
        .replace(";", "\\;")
        .replace(",", "\\,")
        .replace("\r\n", "\\n")
        .replace("\n", "\\n")
    )


def generate_ical_content(event: CalendarEvent, *, now: datetime | None = None) -> str:
    """Return the text of a single-event iCalendar file."""

    stamp = now or now_in_app_naive_datetime()
    lines = [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        "PRODID:-//Campus Hub//Event Calendar//EN",
        "BEGIN:VEVENT",
        f"UID:{int(_time.time() * 1000)}@campushub",
        f"DTSTAMP:{stamp.strftime(_STAMP_FORMAT)}",
        f"DTSTART:{event.start.strftime(_STAMP_FORMAT)}",
        f"DTEND:{event.end.strftime(_STAMP_FORMAT)}",
        f"SUMMARY:{_escape_text(event.title)}",
        f"DESCRIPTION:{_escape_text(event.description)}",
        f"LOCATION:{_escape_text(event.location)}",
        "END:VEVENT",
        "END:VCALENDAR",
    ]
    return "\n".join(lines)


def ical_filename(title: str) -> str:
    """Return a filesystem-safe ``.ics`` file name for ``title``."""

    return f"{re.sub(r'[^a-zA-Z0-9]', '_', title)}.ics"


__all__ = [
    "CalendarEvent",
    "DEFAULT_DURATION_HOURS",
    "create_calendar_event",
    "generate_google_calendar_url",
    "generate_ical_content",
    "ical_filename",
]
