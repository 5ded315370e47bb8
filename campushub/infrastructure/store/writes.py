"""Single-call write helpers that log and re-raise failures."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from .client import Row, StoreClient

logger = logging.getLogger(__name__)


async def create_row(store: StoreClient, table: str, values: Mapping[str, Any]) -> Row:
    try:
        return await store.insert(table, values)
    except Exception:
        logger.exception("Error creating row in %s", table)
        raise


async def update_row(
    store: StoreClient, table: str, row_id: Any, values: Mapping[str, Any]
) -> Row:
    try:
        return await store.update(table, row_id, values)
    except Exception:
        logger.exception("Error updating %s row %s", table, row_id)
        raise


async def set_row(
    store: StoreClient,
    table: str,
    values: Mapping[str, Any],
    row_id: Optional[Any] = None,
) -> Row:
    """Replace the row ``row_id`` when given, otherwise create a new one."""

    try:
        return await store.upsert(table, values, row_id)
    except Exception:
        logger.exception("Error setting %s row %s", table, row_id)
        raise


async def delete_row(store: StoreClient, table: str, row_id: Any) -> Row:
    try:
        return await store.delete(table, row_id)
    except Exception:
        logger.exception("Error deleting %s row %s", table, row_id)
        raise


__all__ = ["create_row", "update_row", "set_row", "delete_row"]
