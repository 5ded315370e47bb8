"""Use cases for reading and editing the signed-in user's profile."""

from __future__ import annotations

from typing import Any, Mapping

from campushub.application.rows import row_to_entity
from campushub.domain.entities import DEFAULT_EMAIL_PREFERENCES, User
from campushub.infrastructure.store import StoreClient, update_row

EDITABLE_PROFILE_FIELDS = (
    "first_name",
    "last_name",
    "avatar",
    "roll_number",
    "branch",
    "section",
)


async def get_user(store: StoreClient, user_id: int) -> User:
    row = await store.select_one("users", user_id)
    return row_to_entity(User, row)


async def update_profile(
    store: StoreClient, user: User, changes: Mapping[str, Any]
) -> User:
    """Apply profile edits, ignoring fields the user may not change."""

    values = {
        key: value for key, value in changes.items() if key in EDITABLE_PROFILE_FIELDS
    }
    if changes.get("email_preferences") is not None:
        preferences = dict(DEFAULT_EMAIL_PREFERENCES)
        preferences.update(user.email_preferences or {})
        preferences.update(
            {
                key: bool(value)
                for key, value in changes["email_preferences"].items()
                if key in DEFAULT_EMAIL_PREFERENCES
            }
        )
        values["email_preferences"] = preferences
    if not values:
        return user
    row = await update_row(store, "users", user.id, values)
    return row_to_entity(User, row)
