"""Use case for AI assisted event tag suggestions."""

from __future__ import annotations

import logging
from typing import Callable, Protocol

import anyio

logger = logging.getLogger(__name__)

MIN_DESCRIPTION_LENGTH = 20


class TagSuggestionValidationError(ValueError):
    """Raised before any model call when the description is too short."""


class TagSuggester(Protocol):
    def suggest_tags(self, description: str) -> dict[str, list[str]]: ...


async def suggest_event_tags(
    description: str, service_factory: Callable[[], TagSuggester]
) -> dict[str, list[str]]:
    """Return the model's ``{"tags": [...]}`` for ``description``.

    ``service_factory`` is only invoked once the description is long enough.
    """

    normalized = (description or "").strip()
    if len(normalized) < MIN_DESCRIPTION_LENGTH:
        raise TagSuggestionValidationError(
            "Description must be at least 20 characters long."
        )
    service = service_factory()
    result = await anyio.to_thread.run_sync(service.suggest_tags, normalized)
    logger.info("Suggested %s tags", len(result.get("tags", [])))
    return result
