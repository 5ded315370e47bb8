"""Use case for uploading an event image to object storage."""

from __future__ import annotations

import logging
from functools import partial
from typing import Callable, Optional

import anyio

from campushub.application.rows import row_to_entity
from campushub.domain.entities import Event, User
from campushub.infrastructure.storage import delete_blob_by_url, upload_event_image
from campushub.infrastructure.store import StoreClient, update_row

from .manage_events import ensure_can_edit, get_event

logger = logging.getLogger(__name__)


async def set_event_image(
    store: StoreClient,
    user: User,
    event_id: int,
    *,
    filename: str,
    data: bytes,
    content_type: Optional[str],
    uploader: Callable[..., str] = upload_event_image,
    remover: Callable[[str], None] = delete_blob_by_url,
) -> Event:
    """Upload a new image for ``event_id`` and drop the one it replaces."""

    event = await get_event(store, event_id)
    ensure_can_edit(user, event)
    url = await anyio.to_thread.run_sync(
        partial(uploader, event_id, filename, data, content_type=content_type)
    )
    row = await update_row(store, "events", event_id, {"image": url})

    if event.image and event.image != url:
        try:
            await anyio.to_thread.run_sync(remover, event.image)
        except Exception:
            logger.warning("Could not remove previous image for event %s", event_id)
    return row_to_entity(Event, row)
