"""Use cases for event reminders."""

from .reminders import (
    REMINDER_OFFSETS,
    create_reminder,
    delete_unsent_reminders,
    dispatch_due_reminders,
    get_default_reminder_time,
    get_reminder_time_options,
    list_reminders,
    mark_reminder_as_sent,
)

__all__ = [
    "REMINDER_OFFSETS",
    "create_reminder",
    "delete_unsent_reminders",
    "dispatch_due_reminders",
    "get_default_reminder_time",
    "get_reminder_time_options",
    "list_reminders",
    "mark_reminder_as_sent",
]
