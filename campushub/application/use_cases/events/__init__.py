"""Use cases for campus events."""

from .event_image import set_event_image
from .manage_events import (
    EventPermissionError,
    create_event,
    delete_event,
    ensure_can_edit,
    get_event,
    list_events,
    refresh_past_flags,
    update_event,
)
from .suggest_tags import (
    MIN_DESCRIPTION_LENGTH,
    TagSuggestionValidationError,
    suggest_event_tags,
)

__all__ = [
    "EventPermissionError",
    "MIN_DESCRIPTION_LENGTH",
    "TagSuggestionValidationError",
    "create_event",
    "delete_event",
    "ensure_can_edit",
    "get_event",
    "list_events",
    "refresh_past_flags",
    "set_event_image",
    "suggest_event_tags",
    "update_event",
]
