"""Live query bindings kept fresh by refetching on change events."""

from __future__ import annotations

import asyncio
import inspect
import logging
from dataclasses import dataclass, replace
from typing import Any, Awaitable, Callable, Mapping, Optional, Union

from .changes import DELETE, ChangeEvent, Subscription
from .client import OrderBy, StoreClient
from .errors import RowNotFoundError

logger = logging.getLogger(__name__)


@dataclass
class BindingState:
    """Current result of a live query."""

    data: Any = None
    is_loading: bool = True
    error: Optional[BaseException] = None


@dataclass
class DocumentState(BindingState):
    """State of a single row binding; ``exists`` is ``None`` when unknown."""

    exists: Optional[bool] = None


StateCallback = Callable[[BindingState], Union[None, Awaitable[None]]]


class _LiveBinding:
    """Shared fetch, subscribe and refetch lifecycle."""

    def __init__(self, store: StoreClient, on_change: Optional[StateCallback] = None) -> None:
        self._store = store
        self._on_change = on_change
        self._subscription: Optional[Subscription] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._inflight: set[asyncio.Task] = set()
        self._issued = 0
        self._applied = 0
        self._closed = True
        self.state = self._initial_state()

    @property
    def is_subscribed(self) -> bool:
        return self._subscription is not None and self._subscription.active

    async def __aenter__(self):
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.close()

    async def start(self) -> None:
        """Fetch the current result, then subscribe to changes."""

        self._teardown()
        self._loop = asyncio.get_running_loop()
        self._closed = False
        self.state = self._initial_state()
        if not self._should_query():
            self.state = self._idle_state()
            await self._notify()
            return
        await self.refetch()
        if not self._closed:
            self._subscription = self._subscribe()

    async def refetch(self) -> None:
        """Issue the query again and apply its result unless a newer one landed."""

        self._issued += 1
        generation = self._issued
        self.state.is_loading = True
        try:
            result = await self._fetch()
        except Exception as exc:  # noqa: BLE001 - surfaced through ``state.error``
            if not self._accept(generation):
                return
            logger.warning("Live query failed for %s: %s", self._describe(), exc)
            self.state = self._failed_state(exc)
        else:
            if not self._accept(generation):
                return
            self.state = self._loaded_state(result)
        await self._notify()

    async def settle(self) -> None:
        """Wait until every scheduled refetch has finished."""

        while self._inflight:
            await asyncio.gather(*list(self._inflight), return_exceptions=True)

    def close(self) -> None:
        self._closed = True
        self._teardown()

    def _teardown(self) -> None:
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None
        for task in list(self._inflight):
            task.cancel()
        self._inflight.clear()

    def _accept(self, generation: int) -> bool:
        if self._closed or generation < self._applied:
            logger.debug("Discarding stale result for %s", self._describe())
            return False
        self._applied = generation
        return True

    def _handle_change(self, event: ChangeEvent) -> None:
        if self._closed or self._loop is None:
            return
        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None
        if running is self._loop:
            self._schedule(event)
        else:
            self._loop.call_soon_threadsafe(self._schedule, event)

    def _schedule(self, event: ChangeEvent) -> None:
        if self._closed or self._loop is None:
            return
        task = self._loop.create_task(self._on_event(event))
        self._inflight.add(task)
        task.add_done_callback(self._inflight.discard)

    async def _on_event(self, event: ChangeEvent) -> None:
        await self.refetch()

    async def _notify(self) -> None:
        if self._on_change is None:
            return
        try:
            result = self._on_change(self.state)
            if inspect.isawaitable(result):
                await result
        except Exception:
            logger.exception("State callback failed for %s", self._describe())

    def _initial_state(self) -> BindingState:
        return BindingState()

    def _idle_state(self) -> BindingState:
        return BindingState(is_loading=False)

    def _loaded_state(self, result: Any) -> BindingState:
        return BindingState(data=result, is_loading=False)

    def _failed_state(self, exc: BaseException) -> BindingState:
        return replace(self.state, is_loading=False, error=exc)

    def _should_query(self) -> bool:
        return True

    async def _fetch(self) -> Any:
        raise NotImplementedError

    def _subscribe(self) -> Subscription:
        raise NotImplementedError

    def _describe(self) -> str:
        raise NotImplementedError


class CollectionBinding(_LiveBinding):
    """Keep the rows of ``table`` matching ``filters`` up to date.

    Filters are AND-combined equality checks; entries whose value is ``None``
    are ignored. Every change on the table triggers one full refetch.
    """

    def __init__(
        self,
        store: StoreClient,
        table: str,
        filters: Optional[Mapping[str, Any]] = None,
        order_by: OrderBy = None,
        on_change: Optional[StateCallback] = None,
    ) -> None:
        super().__init__(store, on_change)
        self.table = table
        self.filters = dict(filters or {})
        self.order_by = order_by

    @property
    def active_filters(self) -> dict[str, Any]:
        return {key: value for key, value in self.filters.items() if value is not None}

    async def set_options(
        self,
        *,
        table: Optional[str] = None,
        filters: Optional[Mapping[str, Any]] = None,
        order_by: OrderBy = None,
    ) -> None:
        """Replace the query options and restart the binding."""

        if table is not None:
            self.table = table
        if filters is not None:
            self.filters = dict(filters)
        if order_by is not None:
            self.order_by = order_by
        await self.start()

    async def _fetch(self) -> list[dict[str, Any]]:
        return await self._store.select(
            self.table, filters=self.active_filters, order_by=self.order_by
        )

    def _subscribe(self) -> Subscription:
        return self._store.feed.subscribe(self.table, self._handle_change)

    def _describe(self) -> str:
        return f"{self.table} {self.active_filters}"


class DocumentBinding(_LiveBinding):
    """Keep a single row of ``table`` up to date.

    A missing row reports ``exists=False`` without an error. A ``None`` id
    leaves the binding idle.
    """

    def __init__(
        self,
        store: StoreClient,
        table: str,
        row_id: Any,
        on_change: Optional[StateCallback] = None,
    ) -> None:
        super().__init__(store, on_change)
        self.table = table
        self.row_id = row_id

    async def set_row_id(self, row_id: Any) -> None:
        self.row_id = row_id
        await self.start()

    def _should_query(self) -> bool:
        return self.row_id is not None

    async def _fetch(self) -> Optional[dict[str, Any]]:
        return await self._store.select_one(self.table, self.row_id)

    def _subscribe(self) -> Subscription:
        return self._store.feed.subscribe(
            self.table, self._handle_change, row_id=self.row_id
        )

    async def _on_event(self, event: ChangeEvent) -> None:
        if event.type == DELETE:
            self._issued += 1
            self._applied = self._issued
            self.state = DocumentState(data=None, is_loading=False, exists=False)
            await self._notify()
            return
        await self.refetch()

    def _initial_state(self) -> DocumentState:
        return DocumentState()

    def _idle_state(self) -> DocumentState:
        return DocumentState(is_loading=False)

    def _loaded_state(self, result: Any) -> DocumentState:
        return DocumentState(data=result, is_loading=False, exists=True)

    def _failed_state(self, exc: BaseException) -> DocumentState:
        if isinstance(exc, RowNotFoundError):
            return DocumentState(data=None, is_loading=False, exists=False)
        return DocumentState(data=self.state.data, is_loading=False, error=exc)

    def _describe(self) -> str:
        return f"{self.table}#{self.row_id}"


__all__ = [
    "BindingState",
    "CollectionBinding",
    "DocumentBinding",
    "DocumentState",
    "StateCallback",
]
