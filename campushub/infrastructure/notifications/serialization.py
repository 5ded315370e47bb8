"""JSON friendly conversion of store rows."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any


def normalize_datetime_values(value: Any) -> Any:
    """Recursively convert dates and datetimes into ISO strings."""

    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, dict):
        return {key: normalize_datetime_values(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [normalize_datetime_values(item) for item in value]
    return value


__all__ = ["normalize_datetime_values"]
