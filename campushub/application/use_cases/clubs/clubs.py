"""Club requests created by organizers and reviewed by admins."""

from __future__ import annotations

import logging
from typing import Optional

from campushub.application.rows import row_to_entity
from campushub.domain.entities import APPROVAL_STATUSES, Club, User
from campushub.infrastructure.store import StoreClient, create_row, update_row

logger = logging.getLogger(__name__)


async def request_club(
    store: StoreClient,
    organizer: User,
    *,
    name: str,
    description: str = "",
    logo: Optional[str] = None,
) -> Club:
    """Create a club in ``pending`` status owned by ``organizer``."""

    name = name.strip()
    if len(name) < 2:
        raise ValueError("Club name is required.")
    row = await create_row(
        store,
        "clubs",
        {
            "name": name,
            "description": description.strip(),
            "logo": logo,
            "organizer_id": organizer.id,
            "status": "pending",
        },
    )
    logger.info("Club '%s' requested by user %s", name, organizer.id)
    return row_to_entity(Club, row)


async def list_clubs(
    store: StoreClient,
    *,
    status: Optional[str] = None,
    organizer_id: Optional[int] = None,
) -> list[Club]:
    filters = {"status": status, "organizer_id": organizer_id}
    rows = await store.select(
        "clubs",
        filters={key: value for key, value in filters.items() if value is not None},
        order_by="created_at",
    )
    return [row_to_entity(Club, row) for row in rows]


async def review_club(store: StoreClient, club_id: int, status: str) -> Club:
    """Approve or reject a club; approval links it to the organizer profile."""

    if status not in APPROVAL_STATUSES:
        raise ValueError(f"Invalid club status '{status}'")
    row = await update_row(store, "clubs", club_id, {"status": status})
    club = row_to_entity(Club, row)
    if status == "approved":
        try:
            organizer = await store.select_one("users", club.organizer_id)
            club_ids = list(organizer.get("club_ids") or [])
            if club.id not in club_ids:
                club_ids.append(club.id)
                await store.update("users", club.organizer_id, {"club_ids": club_ids})
        except Exception:
            logger.exception("Could not link club %s to its organizer", club.id)
    return club
