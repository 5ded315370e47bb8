"""Push newly created notifications to websocket subscribers."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from anyio import from_thread

from campushub.infrastructure.store import INSERT, ChangeEvent, ChangeFeed, Subscription

from .manager import LiveConnectionManager
from .serialization import normalize_datetime_values

logger = logging.getLogger(__name__)


class NotificationPublisher:
    """Forward notification inserts from the change feed to their user."""

    def __init__(self, manager: LiveConnectionManager) -> None:
        self._manager = manager
        self._subscription: Optional[Subscription] = None

    def attach(self, feed: ChangeFeed) -> None:
        self.detach()
        self._subscription = feed.subscribe("notifications", self._on_change)

    def detach(self) -> None:
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    def _on_change(self, event: ChangeEvent) -> None:
        if event.type != INSERT or not event.new:
            return
        user_id = event.new.get("user_id")
        if not user_id or not self._manager.connection_count(user_id):
            return
        message = {"type": "notification", "data": normalize_datetime_values(event.new)}
        self.dispatch(user_id, message)

    def dispatch(self, user_id: int, message: dict) -> None:
        """Schedule delivery of ``message`` on the running event loop."""

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            from_thread.run(self._manager.send_to_user, user_id, message)
        else:
            loop.create_task(self._manager.send_to_user(user_id, message))


__all__ = ["NotificationPublisher"]
