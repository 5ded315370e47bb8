"""Per-connection live queries backed by collection and document bindings."""

from __future__ import annotations

import logging
from functools import partial
from typing import Any, Awaitable, Callable, Mapping, Optional

from campushub.domain.entities import User
from campushub.infrastructure.store import (
    BindingState,
    CollectionBinding,
    DocumentBinding,
    DocumentState,
    StoreClient,
)

from .serialization import normalize_datetime_values

logger = logging.getLogger(__name__)

OWNER_SCOPED_TABLES = frozenset({"notifications", "reminders", "registrations"})
ADMIN_COLLECTIONS = frozenset({"users"})

Sender = Callable[[dict[str, Any]], Awaitable[None]]


class LiveQueryError(ValueError):
    """Raised when a client requests a live query it may not hold."""


class LiveQuerySession:
    """Hold the live queries opened by one websocket client.

    Rows of owner-scoped tables are always filtered to the signed-in user
    unless the user is an admin.
    """

    def __init__(self, store: StoreClient, user: User, send: Sender) -> None:
        self._store = store
        self._user = user
        self._send = send
        self._bindings: dict[str, CollectionBinding | DocumentBinding] = {}

    @property
    def subscription_ids(self) -> tuple[str, ...]:
        return tuple(self._bindings)

    async def subscribe(
        self,
        subscription_id: str,
        table: str,
        *,
        filters: Optional[Mapping[str, Any]] = None,
        order_by: Any = None,
    ) -> None:
        self._store.model_for(table)
        if table in ADMIN_COLLECTIONS and not self._user.is_admin():
            raise LiveQueryError(f"Not allowed to watch '{table}'")
        scoped = dict(filters or {})
        if table in OWNER_SCOPED_TABLES and not self._user.is_admin():
            scoped["user_id"] = self._user.id
        self.unsubscribe(subscription_id)
        binding = CollectionBinding(
            self._store,
            table,
            scoped,
            order_by,
            on_change=partial(self._push_snapshot, subscription_id, table),
        )
        self._bindings[subscription_id] = binding
        await binding.start()

    async def subscribe_document(self, subscription_id: str, table: str, row_id: Any) -> None:
        self._store.model_for(table)
        if table in ADMIN_COLLECTIONS and not self._user.is_admin():
            if str(row_id) != str(self._user.id):
                raise LiveQueryError(f"Not allowed to watch '{table}' row {row_id}")
        self.unsubscribe(subscription_id)
        binding = DocumentBinding(
            self._store,
            table,
            row_id,
            on_change=partial(self._push_document, subscription_id, table),
        )
        self._bindings[subscription_id] = binding
        await binding.start()

    def unsubscribe(self, subscription_id: str) -> bool:
        binding = self._bindings.pop(subscription_id, None)
        if binding is None:
            return False
        binding.close()
        return True

    def close(self) -> None:
        for subscription_id in list(self._bindings):
            self.unsubscribe(subscription_id)

    def _visible(self, table: str, row: Optional[Mapping[str, Any]]) -> bool:
        if row is None or table not in OWNER_SCOPED_TABLES or self._user.is_admin():
            return True
        return row.get("user_id") == self._user.id

    async def _push_snapshot(self, subscription_id: str, table: str, state: BindingState) -> None:
        await self._send(
            {
                "type": "snapshot",
                "id": subscription_id,
                "table": table,
                "data": normalize_datetime_values(state.data),
                "is_loading": state.is_loading,
                "error": str(state.error) if state.error else None,
            }
        )

    async def _push_document(
        self, subscription_id: str, table: str, state: DocumentState
    ) -> None:
        data, exists = state.data, state.exists
        if not self._visible(table, data):
            data, exists = None, False
        await self._send(
            {
                "type": "document",
                "id": subscription_id,
                "table": table,
                "data": normalize_datetime_values(data),
                "exists": exists,
                "is_loading": state.is_loading,
                "error": str(state.error) if state.error else None,
            }
        )


__all__ = [
    "ADMIN_COLLECTIONS",
    "OWNER_SCOPED_TABLES",
    "LiveQueryError",
    "LiveQuerySession",
]
