"""Utility helpers for reusable functionality."""

from .datetime import (
    combine_event_datetime,
    ensure_app_naive_datetime,
    get_app_timezone,
    is_event_past,
    now_in_app_naive_datetime,
    now_in_app_timezone,
    parse_event_date,
    parse_event_time,
)
from .formatting import format_date, format_time, truncate_text

__all__ = [
    "combine_event_datetime",
    "ensure_app_naive_datetime",
    "get_app_timezone",
    "is_event_past",
    "now_in_app_naive_datetime",
    "now_in_app_timezone",
    "parse_event_date",
    "parse_event_time",
    "format_date",
    "format_time",
    "truncate_text",
]
