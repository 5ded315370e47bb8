"""Exceptions raised by the table-addressed store client."""

from __future__ import annotations


class StoreError(RuntimeError):
    """Raised when the underlying database rejects a query or write."""


class UnknownTableError(StoreError):
    """Raised when a table name is not registered with the store."""

    def __init__(self, table: str) -> None:
        super().__init__(f"Unknown table '{table}'")
        self.table = table


class RowNotFoundError(StoreError):
    """Raised when a primary key lookup returns no rows."""

    def __init__(self, table: str, row_id) -> None:
        super().__init__(f"No rows found in '{table}' for id {row_id}")
        self.table = table
        self.row_id = row_id


__all__ = ["StoreError", "UnknownTableError", "RowNotFoundError"]
