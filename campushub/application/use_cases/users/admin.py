"""Administrative use cases over user profiles."""

from __future__ import annotations

from typing import Optional

from campushub.application.rows import row_to_entity
from campushub.domain.entities import (
    APPROVAL_STATUSES,
    ORGANIZER_PENDING,
    ROLE_CLUB_ORGANIZER,
    ROLES,
    User,
)
from campushub.infrastructure.store import StoreClient, update_row


async def list_users(
    store: StoreClient,
    *,
    role: Optional[str] = None,
    organizer_status: Optional[str] = None,
) -> list[User]:
    filters = {"role": role, "organizer_status": organizer_status}
    rows = await store.select(
        "users",
        filters={key: value for key, value in filters.items() if value is not None},
        order_by="created_at",
    )
    return [row_to_entity(User, row) for row in rows]


async def change_user_role(store: StoreClient, user_id: int, role: str) -> User:
    """Change the role of ``user_id``; new organizers start pending approval."""

    if role not in ROLES:
        raise ValueError(f"Invalid role '{role}'")
    current = row_to_entity(User, await store.select_one("users", user_id))
    values: dict[str, object] = {"role": role}
    if role == ROLE_CLUB_ORGANIZER and current.organizer_status is None:
        values["organizer_status"] = ORGANIZER_PENDING
    row = await update_row(store, "users", user_id, values)
    return row_to_entity(User, row)


async def set_organizer_status(store: StoreClient, user_id: int, status: str) -> User:
    if status not in APPROVAL_STATUSES:
        raise ValueError(f"Invalid organizer status '{status}'")
    current = row_to_entity(User, await store.select_one("users", user_id))
    if current.role != ROLE_CLUB_ORGANIZER:
        raise ValueError("User is not a club organizer")
    row = await update_row(store, "users", user_id, {"organizer_status": status})
    return row_to_entity(User, row)
