"""Tests for collection and document live bindings."""

from __future__ import annotations

import anyio
import pytest

from campushub.infrastructure.database import SessionLocal
from campushub.infrastructure.store import (
    ChangeFeed,
    CollectionBinding,
    DocumentBinding,
    StoreClient,
    StoreError,
)

pytestmark = pytest.mark.anyio


class DelayedStore(StoreClient):
    """Store whose selects can be held back after reading the database."""

    def __init__(self) -> None:
        super().__init__(SessionLocal, ChangeFeed())
        self.delays: list[float] = []

    async def select(self, table, **kwargs):
        delay = self.delays.pop(0) if self.delays else 0
        rows = await super().select(table, **kwargs)
        await anyio.sleep(delay)
        return rows


class CountingStore(StoreClient):
    """Store that records how many selects were issued per table."""

    def __init__(self) -> None:
        super().__init__(SessionLocal, ChangeFeed())
        self.selects: dict[str, int] = {}

    async def select(self, table, **kwargs):
        self.selects[table] = self.selects.get(table, 0) + 1
        return await super().select(table, **kwargs)


def _club(organizer_id: int, name: str, status: str = "pending"):
    return {
        "name": name,
        "description": f"{name} club",
        "organizer_id": organizer_id,
        "status": status,
    }


async def test_collection_binding_loads_then_follows_changes(store, make_user) -> None:
    organizer = make_user("org@campus.edu")
    states = []
    binding = CollectionBinding(
        store,
        "clubs",
        {"status": "approved", "organizer_id": None},
        "name",
        on_change=lambda state: states.append(state),
    )

    async with binding:
        assert binding.state.is_loading is False
        assert binding.state.data == []
        assert binding.active_filters == {"status": "approved"}
        assert binding.is_subscribed

        await store.insert("clubs", _club(organizer.id, "Photography", "approved"))
        await store.insert("clubs", _club(organizer.id, "Debate"))
        await binding.settle()

        assert [row["name"] for row in binding.state.data] == ["Photography"]
        assert binding.state.error is None

    assert not binding.is_subscribed
    assert store.feed.subscription_count("clubs") == 0
    assert len(states) >= 2


async def test_each_change_triggers_exactly_one_refetch(make_user) -> None:
    organizer = make_user("org@campus.edu")
    store = CountingStore()

    async with CollectionBinding(store, "clubs", order_by="name") as binding:
        assert store.selects["clubs"] == 1

        for name in ("Chess", "Debate", "Robotics"):
            await store.insert("clubs", _club(organizer.id, name))
        await binding.settle()

        assert store.selects["clubs"] == 4
        assert [row["name"] for row in binding.state.data] == ["Chess", "Debate", "Robotics"]


async def test_stale_refetch_does_not_overwrite_newer_result(make_user) -> None:
    organizer = make_user("org@campus.edu")
    store = DelayedStore()
    snapshots = []
    binding = CollectionBinding(
        store,
        "clubs",
        on_change=lambda state: snapshots.append(len(state.data or [])),
    )
    await binding.start()

    store.delays = [0.3, 0]
    async with anyio.create_task_group() as tg:
        tg.start_soon(binding.refetch)
        await anyio.sleep(0.1)
        await store.insert("clubs", _club(organizer.id, "Chess"))
        await binding.settle()

    assert len(binding.state.data) == 1
    assert snapshots[-1] == 1
    binding.close()


async def test_set_options_resubscribes_to_new_table(store, make_user) -> None:
    make_user("org@campus.edu")
    binding = CollectionBinding(store, "clubs")
    await binding.start()

    await binding.set_options(table="users", filters={"role": "student"})

    assert store.feed.subscription_count("clubs") == 0
    assert store.feed.subscription_count("users") == 1
    assert [row["email"] for row in binding.state.data] == ["org@campus.edu"]
    binding.close()


async def test_collection_binding_reports_errors(store) -> None:
    binding = CollectionBinding(store, "clubs", {"missing_column": 1})

    await binding.start()

    assert binding.state.is_loading is False
    assert isinstance(binding.state.error, StoreError)
    binding.close()


async def test_document_binding_tracks_single_row(store, make_user) -> None:
    organizer = make_user("org@campus.edu")
    club = await store.insert("clubs", _club(organizer.id, "Film"))
    other = await store.insert("clubs", _club(organizer.id, "Drama"))
    binding = DocumentBinding(store, "clubs", club["id"])

    await binding.start()
    assert binding.state.exists is True
    assert binding.state.data["name"] == "Film"

    await store.update("clubs", other["id"], {"status": "approved"})
    await store.update("clubs", club["id"], {"status": "approved"})
    await binding.settle()
    assert binding.state.data["status"] == "approved"

    await store.delete("clubs", club["id"])
    await binding.settle()
    assert binding.state.exists is False
    assert binding.state.data is None
    assert binding.state.error is None
    binding.close()


async def test_document_binding_missing_and_idle(store) -> None:
    missing = DocumentBinding(store, "clubs", 404)
    await missing.start()
    assert missing.state.exists is False
    assert missing.state.error is None
    missing.close()

    idle = DocumentBinding(store, "clubs", None)
    await idle.start()
    assert idle.state.is_loading is False
    assert idle.state.exists is None
    assert not idle.is_subscribed

    await idle.set_row_id(404)
    assert idle.is_subscribed
    idle.close()


async def test_change_from_worker_thread_is_marshalled(store, make_user) -> None:
    organizer = make_user("org@campus.edu")
    binding = CollectionBinding(store, "clubs")
    await binding.start()
    row = await store.insert("clubs", _club(organizer.id, "Astronomy"))
    await binding.settle()

    from campushub.infrastructure.store import UPDATE, ChangeEvent

    await anyio.to_thread.run_sync(
        store.feed.publish, ChangeEvent("clubs", UPDATE, row["id"], new=row)
    )
    await anyio.sleep(0.05)
    await binding.settle()

    assert [item["name"] for item in binding.state.data] == ["Astronomy"]
    binding.close()
