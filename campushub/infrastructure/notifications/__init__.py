"""Realtime delivery of live queries and notifications."""

from .live import ADMIN_COLLECTIONS, OWNER_SCOPED_TABLES, LiveQueryError, LiveQuerySession
from .manager import LiveConnectionManager
from .publisher import NotificationPublisher
from .serialization import normalize_datetime_values

__all__ = [
    "ADMIN_COLLECTIONS",
    "OWNER_SCOPED_TABLES",
    "LiveConnectionManager",
    "LiveQueryError",
    "LiveQuerySession",
    "NotificationPublisher",
    "normalize_datetime_values",
]
