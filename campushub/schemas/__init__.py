"""Reusable JSON Schemas for structured model responses."""
from __future__ import annotations

from importlib import resources
import json
from functools import lru_cache
from typing import Any


@lru_cache(maxsize=None)
def load_event_tags_schema() -> dict[str, Any]:
    """Return the JSON schema for suggested event tags."""
    with resources.files(__name__).joinpath("event_tags.schema.json").open(
        "r", encoding="utf-8"
    ) as fp:
        return json.load(fp)
