"""Validation helpers shared by the event form and the event use cases."""

from __future__ import annotations

import re
from datetime import date

from campushub.domain.entities import EVENT_CATEGORIES

TIME_PATTERN = re.compile(r"^([0-1]?[0-9]|2[0-3]):[0-5][0-9]$")


def _require_length(value: str | None, minimum: int, message: str) -> str:
    normalized = (value or "").strip()
    if len(normalized) < minimum:
        raise ValueError(message)
    return normalized


def ensure_title(value: str | None) -> str:
    return _require_length(value, 3, "Title must be at least 3 characters.")


def ensure_description(value: str | None) -> str:
    return _require_length(value, 10, "Description must be at least 10 characters.")


def ensure_venue(value: str | None) -> str:
    return _require_length(value, 3, "Venue is required.")


def ensure_club_name(value: str | None) -> str:
    return _require_length(value, 2, "Club name is required.")


def ensure_time(value: str | None) -> str:
    """Return ``value`` as zero padded ``HH:MM``."""

    normalized = (value or "").strip()
    if not TIME_PATTERN.match(normalized):
        raise ValueError("Invalid time format (HH:MM)")
    hours, minutes = normalized.split(":")
    return f"{int(hours):02d}:{minutes}"


def ensure_date(value: str | date | None) -> str:
    """Return the ISO ``YYYY-MM-DD`` form of ``value``."""

    if value is None or value == "":
        raise ValueError("A date for the event is required.")
    if isinstance(value, date):
        return value.isoformat()
    try:
        return date.fromisoformat(str(value).strip().split("T", 1)[0]).isoformat()
    except ValueError as exc:
        raise ValueError("A date for the event is required.") from exc


def ensure_category(value: str | None) -> str:
    if value not in EVENT_CATEGORIES:
        raise ValueError("Please select a category.")
    return value


def normalize_tags(tags: list[str] | None) -> list[str]:
    """Strip tags and drop blanks and duplicates, keeping their order."""

    seen: set[str] = set()
    normalized: list[str] = []
    for tag in tags or []:
        candidate = str(tag).strip()
        if candidate and candidate.lower() not in seen:
            seen.add(candidate.lower())
            normalized.append(candidate)
    return normalized


__all__ = [
    "TIME_PATTERN",
    "ensure_title",
    "ensure_description",
    "ensure_venue",
    "ensure_club_name",
    "ensure_time",
    "ensure_date",
    "ensure_category",
    "normalize_tags",
]
