"""Table-addressed async client over SQLAlchemy sessions."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from functools import partial
from typing import Any, Callable, Optional, Sequence, Union

import anyio
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .changes import DELETE, INSERT, UPDATE, ChangeEvent, ChangeFeed
from .errors import RowNotFoundError, StoreError, UnknownTableError

logger = logging.getLogger(__name__)

OrderBy = Union[str, tuple[str, str], None]
Row = dict[str, Any]


def normalize_order(order_by: OrderBy) -> Optional[tuple[str, bool]]:
    """Return ``(column, descending)`` for ``order_by``.

    Accepts ``"date"``, ``"-date"`` or ``("date", "desc")``.
    """

    if not order_by:
        return None
    if isinstance(order_by, str):
        if order_by.startswith("-"):
            return order_by[1:], True
        return order_by, False
    column, direction = order_by
    direction = (direction or "asc").lower()
    if direction not in {"asc", "desc"}:
        raise StoreError(f"Invalid order direction '{direction}'")
    return column, direction == "desc"


class StoreClient:
    """Run queries and writes against registered tables.

    Rows are returned as plain dictionaries. Columns flagged with
    ``info={"private": True}`` are writable but never read back. Each
    successful write publishes one :class:`ChangeEvent` on ``feed``.
    """

    def __init__(
        self,
        session_factory: Callable[[], Session],
        feed: Optional[ChangeFeed] = None,
        *,
        tables: Optional[Mapping[str, type]] = None,
    ) -> None:
        if tables is None:
            from campushub.infrastructure.models import TABLE_MODELS

            tables = TABLE_MODELS
        self._session_factory = session_factory
        self._tables = dict(tables)
        self.feed = feed or ChangeFeed()

    @property
    def tables(self) -> tuple[str, ...]:
        return tuple(self._tables)

    def model_for(self, table: str):
        try:
            return self._tables[table]
        except KeyError as exc:
            raise UnknownTableError(table) from exc

    async def select(
        self,
        table: str,
        *,
        filters: Optional[Mapping[str, Any]] = None,
        order_by: OrderBy = None,
        limit: Optional[int] = None,
    ) -> list[Row]:
        model = self.model_for(table)
        return await self._run(
            partial(self._select_sync, model, dict(filters or {}), order_by, limit)
        )

    async def select_one(self, table: str, row_id: Any) -> Row:
        model = self.model_for(table)
        row = await self._run(partial(self._get_sync, model, row_id))
        if row is None:
            raise RowNotFoundError(table, row_id)
        return row

    async def count(
        self, table: str, *, filters: Optional[Mapping[str, Any]] = None
    ) -> int:
        model = self.model_for(table)
        return await self._run(partial(self._count_sync, model, dict(filters or {})))

    async def insert(self, table: str, values: Mapping[str, Any]) -> Row:
        model = self.model_for(table)
        row = await self._run(partial(self._insert_sync, model, dict(values)))
        self._publish(ChangeEvent(table, INSERT, row["id"], new=row))
        return row

    async def update(self, table: str, row_id: Any, values: Mapping[str, Any]) -> Row:
        model = self.model_for(table)
        result = await self._run(partial(self._update_sync, model, row_id, dict(values)))
        if result is None:
            raise RowNotFoundError(table, row_id)
        old, new = result
        self._publish(ChangeEvent(table, UPDATE, new["id"], new=new, old=old))
        return new

    async def upsert(
        self, table: str, values: Mapping[str, Any], row_id: Any = None
    ) -> Row:
        """Replace the row identified by ``row_id`` or create it."""

        model = self.model_for(table)
        payload = dict(values)
        if row_id is not None:
            payload["id"] = row_id
        created, old, new = await self._run(partial(self._upsert_sync, model, payload))
        if created:
            self._publish(ChangeEvent(table, INSERT, new["id"], new=new))
        else:
            self._publish(ChangeEvent(table, UPDATE, new["id"], new=new, old=old))
        return new

    async def delete(self, table: str, row_id: Any) -> Row:
        model = self.model_for(table)
        old = await self._run(partial(self._delete_sync, model, row_id))
        if old is None:
            raise RowNotFoundError(table, row_id)
        self._publish(ChangeEvent(table, DELETE, old["id"], old=old))
        return old

    async def _run(self, func_):
        return await anyio.to_thread.run_sync(func_)

    def _publish(self, event: ChangeEvent) -> None:
        logger.debug("Publishing %s on %s (id=%s)", event.type, event.table, event.row_id)
        self.feed.publish(event)

    # Synchronous helpers executed on worker threads.

    def _select_sync(self, model, filters, order_by, limit) -> list[Row]:
        statement = select(model)
        for key, value in filters.items():
            statement = statement.where(self._column(model, key) == value)
        order = normalize_order(order_by)
        if order is not None:
            column = self._column(model, order[0])
            statement = statement.order_by(column.desc() if order[1] else column.asc())
        if limit is not None:
            statement = statement.limit(limit)
        with self._session_factory() as session:
            try:
                models = session.scalars(statement).all()
            except SQLAlchemyError as exc:
                raise StoreError(str(exc)) from exc
            return [self._to_row(item) for item in models]

    def _count_sync(self, model, filters) -> int:
        statement = select(func.count()).select_from(model)
        for key, value in filters.items():
            statement = statement.where(self._column(model, key) == value)
        with self._session_factory() as session:
            try:
                return int(session.scalar(statement) or 0)
            except SQLAlchemyError as exc:
                raise StoreError(str(exc)) from exc

    def _get_sync(self, model, row_id) -> Optional[Row]:
        with self._session_factory() as session:
            try:
                instance = session.get(model, self._coerce_id(row_id))
            except SQLAlchemyError as exc:
                raise StoreError(str(exc)) from exc
            return self._to_row(instance) if instance is not None else None

    def _insert_sync(self, model, values) -> Row:
        instance = model()
        self._apply_values(instance, values)
        with self._session_factory() as session:
            session.add(instance)
            self._commit(session)
            session.refresh(instance)
            return self._to_row(instance)

    def _update_sync(self, model, row_id, values):
        values.pop("id", None)
        with self._session_factory() as session:
            instance = session.get(model, self._coerce_id(row_id))
            if instance is None:
                return None
            old = self._to_row(instance)
            self._apply_values(instance, values)
            self._commit(session)
            session.refresh(instance)
            return old, self._to_row(instance)

    def _upsert_sync(self, model, values):
        row_id = values.get("id")
        with self._session_factory() as session:
            instance = (
                session.get(model, self._coerce_id(row_id)) if row_id is not None else None
            )
            created = instance is None
            old = None if created else self._to_row(instance)
            if created:
                instance = model()
                session.add(instance)
            else:
                values.pop("id", None)
            self._apply_values(instance, values)
            self._commit(session)
            session.refresh(instance)
            return created, old, self._to_row(instance)

    def _delete_sync(self, model, row_id) -> Optional[Row]:
        with self._session_factory() as session:
            instance = session.get(model, self._coerce_id(row_id))
            if instance is None:
                return None
            old = self._to_row(instance)
            session.delete(instance)
            self._commit(session)
            return old

    @staticmethod
    def _commit(session: Session) -> None:
        try:
            session.commit()
        except SQLAlchemyError as exc:
            session.rollback()
            logger.warning("Store write rejected: %s", exc)
            raise StoreError(str(getattr(exc, "orig", None) or exc)) from exc

    @staticmethod
    def _column(model, name: str):
        column = model.__table__.columns.get(name)
        if column is None or column.info.get("private"):
            raise StoreError(f"Unknown column '{name}' for table '{model.__tablename__}'")
        return column

    @staticmethod
    def _apply_values(instance, values: Mapping[str, Any]) -> None:
        columns = instance.__table__.columns
        for key, value in values.items():
            if key not in columns:
                raise StoreError(
                    f"Unknown column '{key}' for table '{instance.__tablename__}'"
                )
            setattr(instance, key, value)

    @staticmethod
    def _coerce_id(row_id: Any) -> Any:
        if isinstance(row_id, str) and row_id.isdigit():
            return int(row_id)
        return row_id

    @staticmethod
    def _to_row(instance) -> Row:
        return {
            column.key: getattr(instance, column.key)
            for column in instance.__table__.columns
            if not column.info.get("private")
        }


__all__ = ["OrderBy", "Row", "StoreClient", "normalize_order"]
