"""In-process change feed published after every successful store write."""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Callable, DefaultDict, Optional

logger = logging.getLogger(__name__)

INSERT = "INSERT"
UPDATE = "UPDATE"
DELETE = "DELETE"
CHANGE_TYPES = (INSERT, UPDATE, DELETE)


@dataclass(frozen=True)
class ChangeEvent:
    """Describe a single row change on ``table``."""

    table: str
    type: str
    row_id: Any
    new: Optional[dict[str, Any]] = None
    old: Optional[dict[str, Any]] = None

    def __post_init__(self) -> None:
        if self.type not in CHANGE_TYPES:
            raise ValueError(f"Unknown change type '{self.type}'")


ChangeHandler = Callable[[ChangeEvent], None]


@dataclass(eq=False)
class Subscription:
    """Handle returned by :meth:`ChangeFeed.subscribe`."""

    feed: "ChangeFeed"
    table: str
    handler: ChangeHandler
    row_id: Any = None
    active: bool = field(default=True)

    def matches(self, event: ChangeEvent) -> bool:
        if event.table != self.table:
            return False
        if self.row_id is None:
            return True
        return str(event.row_id) == str(self.row_id)

    def unsubscribe(self) -> None:
        if not self.active:
            return
        self.active = False
        self.feed._remove(self)


class ChangeFeed:
    """Keep table and row scoped subscriptions and fan out change events."""

    def __init__(self) -> None:
        self._subscriptions: DefaultDict[str, list[Subscription]] = defaultdict(list)

    def subscribe(
        self, table: str, handler: ChangeHandler, *, row_id: Any = None
    ) -> Subscription:
        subscription = Subscription(self, table, handler, row_id)
        self._subscriptions[table].append(subscription)
        logger.debug("Subscribed to %s (row=%s)", table, row_id)
        return subscription

    def publish(self, event: ChangeEvent) -> None:
        """Deliver ``event`` to every matching subscription.

        Handler failures are logged and do not stop delivery to the others.
        """

        for subscription in list(self._subscriptions.get(event.table, ())):
            if not subscription.active or not subscription.matches(event):
                continue
            try:
                subscription.handler(event)
            except Exception:
                logger.exception(
                    "Change handler failed for %s %s on %s",
                    event.type,
                    event.row_id,
                    event.table,
                )

    def subscription_count(self, table: Optional[str] = None) -> int:
        if table is not None:
            return len(self._subscriptions.get(table, ()))
        return sum(len(items) for items in self._subscriptions.values())

    def _remove(self, subscription: Subscription) -> None:
        subscriptions = self._subscriptions.get(subscription.table)
        if not subscriptions:
            return
        try:
            subscriptions.remove(subscription)
        except ValueError:
            return
        if not subscriptions:
            self._subscriptions.pop(subscription.table, None)
        logger.debug("Unsubscribed from %s (row=%s)", subscription.table, subscription.row_id)


__all__ = [
    "INSERT",
    "UPDATE",
    "DELETE",
    "CHANGE_TYPES",
    "ChangeEvent",
    "ChangeFeed",
    "ChangeHandler",
    "Subscription",
]
