"""Conversions between store rows and domain entities."""

from __future__ import annotations

from dataclasses import fields
from typing import Any, Mapping, TypeVar

T = TypeVar("T")


def row_to_entity(entity_cls: type[T], row: Mapping[str, Any]) -> T:
    """Build ``entity_cls`` from the matching keys of ``row``."""

    names = {item.name for item in fields(entity_cls) if item.init}
    return entity_cls(**{key: value for key, value in row.items() if key in names})


__all__ = ["row_to_entity"]
