"""Tests for reminder scheduling, display formatting and calendar exports."""

from __future__ import annotations

from datetime import datetime, timedelta
from urllib.parse import parse_qs, urlparse

import pytest

from campushub.application.rows import row_to_entity
from campushub.application.use_cases.reminders import (
    create_reminder,
    delete_unsent_reminders,
    get_default_reminder_time,
    get_reminder_time_options,
    list_reminders,
    mark_reminder_as_sent,
)
from campushub.domain.entities import Event
from campushub.utils import format_date, format_time, is_event_past, truncate_text
from campushub.utils.calendar import (
    create_calendar_event,
    generate_google_calendar_url,
    generate_ical_content,
    ical_filename,
)


@pytest.mark.parametrize(
    ("value", "expected"),
    [("00:05", "12:05 AM"), ("09:30", "9:30 AM"), ("12:00", "12:00 PM"), ("18:45", "6:45 PM")],
)
def test_format_time(value: str, expected: str) -> None:
    assert format_time(value) == expected


def test_format_date_and_truncate() -> None:
    assert format_date("2030-06-01") == "June 1, 2030"
    assert format_date("2030-12-25T00:00:00") == "December 25, 2030"
    assert truncate_text("a" * 100) == "a" * 100
    assert truncate_text("a" * 101) == "a" * 100 + "..."


def test_is_event_past() -> None:
    now = datetime(2030, 6, 1, 12, 0)
    assert is_event_past("2030-06-01", "11:59", now=now)
    assert not is_event_past("2030-06-01", "12:30", now=now)


def test_default_reminder_is_one_day_before() -> None:
    assert get_default_reminder_time("2030-06-02", "18:30") == datetime(2030, 6, 1, 18, 30)


def test_reminder_options_drop_times_already_passed() -> None:
    now = datetime(2030, 6, 1, 12, 0)

    options = get_reminder_time_options("2030-06-02", "18:00", now=now)

    assert options == [
        ("1 hour before", datetime(2030, 6, 2, 17, 0)),
        ("1 day before", datetime(2030, 6, 1, 18, 0)),
    ]


def test_google_calendar_url() -> None:
    event = create_calendar_event(
        title="Jazz Night", date="2030-06-01", time="19:00", venue="Quad"
    )

    query = parse_qs(urlparse(generate_google_calendar_url(event)).query)

    assert query["action"] == ["TEMPLATE"]
    assert query["text"] == ["Jazz Night"]
    assert query["dates"] == ["20300601T190000/20300601T210000"]
    assert query["location"] == ["Quad"]


def test_ical_content_and_filename() -> None:
    event = create_calendar_event(
        title="Jazz Night", date="2030-06-01", time="19:00", description="Live band"
    )

    content = generate_ical_content(event, now=datetime(2030, 5, 1, 8, 0))

    lines = content.split("\n")
    assert lines[0] == "BEGIN:VCALENDAR"
    assert "DTSTAMP:20300501T080000" in lines
    assert "DTSTART:20300601T190000" in lines
    assert "DTEND:20300601T210000" in lines
    assert "DESCRIPTION:Live band" in lines
    assert ical_filename("Jazz Night!") == "Jazz_Night_.ics"


def test_ical_text_fields_are_escaped() -> None:
    event = create_calendar_event(
        title="Rock, Paper; Scissors",
        date="2030-06-01",
        time="19:00",
        description="Bring snacks,\nwater; and C:\\notes",
        venue="Hall A, Room 2",
    )

    lines = generate_ical_content(event, now=datetime(2030, 5, 1, 8, 0)).split("\n")

    assert "SUMMARY:Rock\\, Paper\\; Scissors" in lines
    assert "DESCRIPTION:Bring snacks\\,\\nwater\\; and C:\\\\notes" in lines
    assert "LOCATION:Hall A\\, Room 2" in lines
    assert lines.index("END:VEVENT") == len(lines) - 2


@pytest.mark.anyio
async def test_reminder_lifecycle(store, make_user, make_event) -> None:
    user = make_user("student@campus.edu")
    event = make_event(user.id, days=10)
    when = get_default_reminder_time(event.date, event.time)

    reminder = await create_reminder(store, user, event, when)
    other = await create_reminder(store, user, event, when - timedelta(days=6))
    await mark_reminder_as_sent(store, other.id)

    assert reminder.sent is False
    assert [item.id for item in await list_reminders(store, user.id)] == [other.id, reminder.id]
    assert await delete_unsent_reminders(store, user.id, event.id) == 1
    remaining = await list_reminders(store, user.id)
    assert [(item.id, item.sent) for item in remaining] == [(other.id, True)]


@pytest.mark.anyio
async def test_reminder_skipped_when_disabled(store, make_user, make_event) -> None:
    user = make_user("student@campus.edu", email_preferences={"event_reminders": False})
    event = make_event(user.id)

    assert await create_reminder(store, user, event, datetime(2030, 1, 1)) is None
    assert await store.count("reminders") == 0


def test_row_to_entity_ignores_unknown_keys() -> None:
    event = row_to_entity(
        Event,
        {
            "id": 1,
            "title": "T",
            "description": "D",
            "date": "2030-01-01",
            "time": "10:00",
            "venue": "V",
            "club_name": "C",
            "organizer_id": 2,
            "category": "Tech",
            "unexpected": True,
        },
    )
    assert event.tags == []
    assert event.organizer_id == 2


@pytest.mark.anyio
async def test_due_reminders_become_notifications(store, make_user, make_event) -> None:
    from campushub.application.use_cases.reminders import dispatch_due_reminders

    user = make_user("student@campus.edu")
    event = make_event(user.id, days=10)
    due = await create_reminder(store, user, event, datetime(2030, 1, 1, 9, 0))
    await create_reminder(store, user, event, datetime(2030, 1, 3, 9, 0))

    dispatched = await dispatch_due_reminders(store, now=datetime(2030, 1, 2, 0, 0))

    assert [item.id for item in dispatched] == [due.id]
    assert dispatched[0].sent is True
    notifications = await store.select("notifications", filters={"user_id": user.id})
    assert [(row["type"], row["event_id"]) for row in notifications] == [("reminder", event.id)]
    assert await dispatch_due_reminders(store, now=datetime(2030, 1, 2, 0, 0)) == []
