"""Tests for the table-addressed store client and its change feed."""

from __future__ import annotations

import pytest

from campushub.infrastructure.store import (
    DELETE,
    INSERT,
    UPDATE,
    ChangeFeed,
    RowNotFoundError,
    StoreError,
    UnknownTableError,
    normalize_order,
)

pytestmark = pytest.mark.anyio


def _event_values(organizer_id: int, **overrides):
    values = {
        "title": "Robotics Expo",
        "description": "Student built robots on display.",
        "date": "2030-03-01",
        "time": "10:00",
        "venue": "Hall B",
        "club_name": "Robotics",
        "organizer_id": organizer_id,
        "category": "Tech",
        "tags": [],
    }
    values.update(overrides)
    return values


@pytest.mark.parametrize(
    ("order_by", "expected"),
    [
        (None, None),
        ("date", ("date", False)),
        ("-date", ("date", True)),
        (("date", "DESC"), ("date", True)),
    ],
)
def test_normalize_order(order_by, expected) -> None:
    assert normalize_order(order_by) == expected


def test_normalize_order_rejects_unknown_direction() -> None:
    with pytest.raises(StoreError):
        normalize_order(("date", "sideways"))


async def test_select_filters_and_orders_rows(store, make_user) -> None:
    organizer = make_user("org@campus.edu")
    await store.insert("events", _event_values(organizer.id, title="Later", date="2030-05-01"))
    await store.insert("events", _event_values(organizer.id, title="Sooner", date="2030-04-01"))
    await store.insert(
        "events", _event_values(organizer.id, title="Concert", category="Music")
    )

    rows = await store.select("events", filters={"category": "Tech"}, order_by="date")
    assert [row["title"] for row in rows] == ["Sooner", "Later"]

    newest = await store.select("events", filters={"category": "Tech"}, order_by="-date", limit=1)
    assert [row["title"] for row in newest] == ["Later"]
    assert await store.count("events", filters={"category": "Music"}) == 1


async def test_private_columns_are_never_returned(store, make_user) -> None:
    user = make_user("student@campus.edu")

    row = await store.select_one("users", user.id)

    assert row["email"] == "student@campus.edu"
    assert "password" not in row
    with pytest.raises(StoreError):
        await store.select("users", filters={"password": "x"})


async def test_unknown_table_and_column(store) -> None:
    with pytest.raises(UnknownTableError):
        await store.select("lectures")
    with pytest.raises(StoreError, match="Unknown column"):
        await store.insert("clubs", {"name": "Chess", "colour": "black"})


async def test_missing_rows_raise_not_found(store) -> None:
    with pytest.raises(RowNotFoundError):
        await store.select_one("events", 999)
    with pytest.raises(RowNotFoundError):
        await store.update("events", 999, {"title": "Nope"})
    with pytest.raises(RowNotFoundError):
        await store.delete("events", "999")


async def test_writes_publish_change_events(store, make_user) -> None:
    organizer = make_user("org@campus.edu")
    received = []
    store.feed.subscribe("events", received.append)

    created = await store.insert("events", _event_values(organizer.id))
    await store.update("events", created["id"], {"title": "Robotics Expo 2030"})
    await store.upsert("events", {**_event_values(organizer.id), "venue": "Hall C"}, created["id"])
    removed = await store.delete("events", created["id"])

    assert [event.type for event in received] == [INSERT, UPDATE, UPDATE, DELETE]
    assert received[1].old["title"] == "Robotics Expo"
    assert received[1].new["title"] == "Robotics Expo 2030"
    assert received[2].new["venue"] == "Hall C"
    assert received[3].old == removed
    assert all(event.row_id == created["id"] for event in received)


async def test_unique_registration_is_enforced(store, make_user, make_event) -> None:
    user = make_user("student@campus.edu")
    event = make_event(user.id)
    values = {
        "event_id": event.id,
        "user_id": user.id,
        "full_name": "Test User",
        "email": user.email,
        "roll_number": "21CS001",
        "branch": "CSE",
        "section": "A",
    }
    await store.insert("registrations", values)

    with pytest.raises(StoreError):
        await store.insert("registrations", values)
    assert await store.count("registrations") == 1


def test_row_scoped_subscription_and_failing_handler() -> None:
    from campushub.infrastructure.store import ChangeEvent

    feed = ChangeFeed()
    seen = []

    def broken(event):
        raise RuntimeError("boom")

    feed.subscribe("events", broken)
    subscription = feed.subscribe("events", seen.append, row_id="7")

    feed.publish(ChangeEvent("events", UPDATE, 7, new={"id": 7}))
    feed.publish(ChangeEvent("events", UPDATE, 8, new={"id": 8}))

    assert [event.row_id for event in seen] == [7]
    subscription.unsubscribe()
    subscription.unsubscribe()
    assert feed.subscription_count("events") == 1


async def test_set_row_creates_then_replaces(store, make_user) -> None:
    from campushub.infrastructure.store import set_row

    organizer = make_user("org@campus.edu")
    received = []
    store.feed.subscribe("clubs", received.append)

    created = await set_row(
        store, "clubs", {"name": "Chess", "description": "", "organizer_id": organizer.id}
    )
    replaced = await set_row(store, "clubs", {"status": "approved"}, created["id"])

    assert replaced["id"] == created["id"]
    assert replaced["name"] == "Chess"
    assert replaced["status"] == "approved"
    assert [event.type for event in received] == [INSERT, UPDATE]


def test_change_event_rejects_unknown_type() -> None:
    from campushub.infrastructure.store import ChangeEvent

    with pytest.raises(ValueError):
        ChangeEvent("events", "TRUNCATE", 1)
