"""Table-addressed store, change feed and live query bindings."""

from .bindings import (
    BindingState,
    CollectionBinding,
    DocumentBinding,
    DocumentState,
)
from .changes import DELETE, INSERT, UPDATE, ChangeEvent, ChangeFeed, Subscription
from .client import StoreClient, normalize_order
from .errors import RowNotFoundError, StoreError, UnknownTableError
from .writes import create_row, delete_row, set_row, update_row

__all__ = [
    "BindingState",
    "CollectionBinding",
    "DocumentBinding",
    "DocumentState",
    "DELETE",
    "INSERT",
    "UPDATE",
    "ChangeEvent",
    "ChangeFeed",
    "Subscription",
    "StoreClient",
    "normalize_order",
    "RowNotFoundError",
    "StoreError",
    "UnknownTableError",
    "create_row",
    "delete_row",
    "set_row",
    "update_row",
]
