"""Queries over registrations."""

from __future__ import annotations

from campushub.application.rows import row_to_entity
from campushub.domain.entities import Registration
from campushub.infrastructure.store import StoreClient


async def list_user_registrations(store: StoreClient, user_id: int) -> list[Registration]:
    rows = await store.select(
        "registrations", filters={"user_id": user_id}, order_by="date"
    )
    return [row_to_entity(Registration, row) for row in rows]


async def list_event_registrations(store: StoreClient, event_id: int) -> list[Registration]:
    rows = await store.select(
        "registrations", filters={"event_id": event_id}, order_by="registered_at"
    )
    return [row_to_entity(Registration, row) for row in rows]
