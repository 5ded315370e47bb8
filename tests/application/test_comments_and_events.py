"""Tests for event management, comments and notifications use cases."""

from __future__ import annotations

import pytest

from campushub.application.use_cases.comments import (
    add_comment,
    build_comment_threads,
    like_comment,
    list_event_comments,
)
from campushub.application.use_cases.events import (
    EventPermissionError,
    create_event,
    delete_event,
    list_events,
    refresh_past_flags,
    update_event,
)
from campushub.application.use_cases.notifications import (
    list_notifications,
    mark_all_notifications_as_read,
    mark_notification_as_read,
)
from campushub.infrastructure.store import RowNotFoundError

pytestmark = pytest.mark.anyio

EVENT_FORM = {
    "title": "  Hack Night ",
    "description": "Build something fun overnight.",
    "date": "2030-06-01",
    "time": "9:05",
    "venue": "Lab 3",
    "club_name": "Coding Club",
    "category": "Tech",
    "tags": ["hackathon", " Hackathon ", "", "food"],
}


async def test_create_event_normalizes_fields(store, make_user) -> None:
    organizer = make_user("org@campus.edu", role="club_organizer", organizer_status="approved")

    event = await create_event(store, organizer, EVENT_FORM)

    assert event.title == "Hack Night"
    assert event.time == "09:05"
    assert event.tags == ["hackathon", "food"]
    assert event.is_past is False
    assert event.registration_count == 0
    assert event.organizer_id == organizer.id


async def test_pending_organizer_cannot_create(store, make_user) -> None:
    pending = make_user("org@campus.edu", role="club_organizer")

    with pytest.raises(EventPermissionError):
        await create_event(store, pending, EVENT_FORM)


async def test_event_form_errors(store, make_user) -> None:
    admin = make_user("admin@campus.edu", role="admin")

    with pytest.raises(ValueError, match="Please select a category."):
        await create_event(store, admin, {**EVENT_FORM, "category": "Gaming"})
    with pytest.raises(ValueError, match="A date for the event is required."):
        await create_event(store, admin, {**EVENT_FORM, "date": ""})


async def test_only_owner_or_admin_edits(store, make_user) -> None:
    owner = make_user("owner@campus.edu", role="club_organizer", organizer_status="approved")
    rival = make_user("rival@campus.edu", role="club_organizer", organizer_status="approved")
    admin = make_user("admin@campus.edu", role="admin")
    event = await create_event(store, owner, EVENT_FORM)

    with pytest.raises(EventPermissionError):
        await update_event(store, rival, event.id, {"title": "Mine now"})

    updated = await update_event(store, admin, event.id, {"date": "2001-01-01"})
    assert updated.is_past is True

    await delete_event(store, owner, event.id)
    with pytest.raises(RowNotFoundError):
        await store.select_one("events", event.id)


async def test_list_events_ordering_and_past_refresh(store, make_user, make_event) -> None:
    organizer = make_user("org@campus.edu", role="admin")
    make_event(organizer.id, days=30, title="Far")
    make_event(organizer.id, days=2, title="Near")
    make_event(organizer.id, days=-5, title="Old", is_past=False)

    assert await refresh_past_flags(store) == 1

    upcoming = await list_events(store, past=False)
    past = await list_events(store, past=True)
    assert [event.title for event in upcoming] == ["Near", "Far"]
    assert [event.title for event in past] == ["Old"]


async def test_comments_only_on_past_events(store, make_user, make_event) -> None:
    organizer = make_user("org@campus.edu", role="admin")
    student = make_user("student@campus.edu", full_name="Sam Student")
    upcoming = make_event(organizer.id)

    with pytest.raises(ValueError, match="Comments are only available for past events."):
        await add_comment(store, student, upcoming, "Great!")
    with pytest.raises(ValueError, match="Comment text is required."):
        await add_comment(store, student, upcoming, "   ")


async def test_only_students_comment_and_like(store, make_user, make_event) -> None:
    admin = make_user("admin@campus.edu", role="admin")
    organizer = make_user("org@campus.edu", role="club_organizer", organizer_status="approved")
    student = make_user("student@campus.edu")
    event = make_event(organizer.id, days=-1)
    top = await add_comment(store, student, event, "Nice one")

    for user in (admin, organizer):
        with pytest.raises(PermissionError, match="Only students can comment on events."):
            await add_comment(store, user, event, "Thanks!")
        with pytest.raises(PermissionError, match="Only students can comment on events."):
            await add_comment(store, user, event, "Thanks!", parent_id=top.id)
        with pytest.raises(PermissionError, match="Only students can like comments."):
            await like_comment(store, user, top.id)

    threads = await list_event_comments(store, event.id)
    assert [thread.text for thread in threads] == ["Nice one"]
    assert threads[0].likes == 0
    assert threads[0].replies == []


async def test_comment_threads_and_organizer_notification(store, make_user, make_event) -> None:
    organizer = make_user("org@campus.edu", role="admin")
    student = make_user("student@campus.edu", full_name="Sam Student")
    classmate = make_user("riley@campus.edu", full_name="Riley Reed")
    event = make_event(organizer.id, days=-1)

    top = await add_comment(store, student, event, "Loved the talk " + "x" * 120)
    reply = await add_comment(store, classmate, event, "Thanks!", parent_id=top.id)
    nested = await add_comment(store, student, event, "You're welcome", parent_id=reply.id)
    await like_comment(store, classmate, top.id)

    assert nested.parent_id == top.id
    threads = await list_event_comments(store, event.id)
    assert len(threads) == 1
    assert threads[0].likes == 1
    assert [item.text for item in threads[0].replies] == ["Thanks!", "You're welcome"]

    inbox = await list_notifications(store, organizer.id)
    assert len(inbox) == 1
    assert inbox[0].type == "comment"
    assert inbox[0].message.startswith('Sam Student commented on "Intro to Rust"')
    assert inbox[0].message.endswith('..."')
    assert inbox[0].action_url == f"/dashboard/events/{event.id}"


def test_orphan_replies_are_dropped() -> None:
    rows = [
        {"id": 1, "event_id": 1, "user_id": 1, "author_name": "A", "text": "top"},
        {"id": 2, "event_id": 1, "user_id": 1, "author_name": "B", "text": "r", "parent_id": 99},
    ]

    threads = build_comment_threads(rows)

    assert [thread.id for thread in threads] == [1]
    assert threads[0].replies == []


async def test_marking_notifications_read(store, make_user, make_event) -> None:
    organizer = make_user("org@campus.edu", role="admin")
    student = make_user("student@campus.edu")
    event = make_event(organizer.id, days=-1)
    await add_comment(store, student, event, "First")
    await add_comment(store, student, event, "Second")
    first, second = await list_notifications(store, organizer.id)

    with pytest.raises(PermissionError):
        await mark_notification_as_read(store, first.id, user_id=student.id)

    assert (await mark_notification_as_read(store, first.id, user_id=organizer.id)).read
    assert await mark_all_notifications_as_read(store, organizer.id) == 1
    assert await list_notifications(store, organizer.id, unread_only=True) == []


async def test_event_image_replaces_previous_blob(store, make_user, make_event) -> None:
    from campushub.application.use_cases.events import set_event_image

    organizer = make_user("org@campus.edu", role="admin")
    event = make_event(organizer.id, image="https://blobs.example/events/1/old.png")
    removed = []

    updated = await set_event_image(
        store,
        organizer,
        event.id,
        filename="cover.png",
        data=b"\x89PNG",
        content_type="image/png",
        uploader=lambda event_id, filename, data, content_type: f"https://blobs.example/{filename}",
        remover=removed.append,
    )

    assert updated.image == "https://blobs.example/cover.png"
    assert removed == ["https://blobs.example/events/1/old.png"]
