"""Registration workflow with best-effort follow-up steps."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import partial
from typing import Awaitable, Callable, Optional

import anyio

from campushub.application.rows import row_to_entity
from campushub.application.use_cases.notifications import notify_registration_success
from campushub.application.use_cases.reminders import (
    create_reminder,
    delete_unsent_reminders,
    get_default_reminder_time,
)
from campushub.domain.entities import ROLE_STUDENT, Event, Registration, User
from campushub.infrastructure.email import send_registration_confirmation_email
from campushub.infrastructure.store import StoreClient, StoreError, create_row, delete_row
from campushub.utils import format_date, format_time

from .validators import ensure_branch, ensure_full_name, ensure_roll_number, ensure_section

logger = logging.getLogger(__name__)

UNREGISTERED = "unregistered"
REGISTERING = "registering"
REGISTERED = "registered"
UNREGISTERING = "unregistering"

STEP_COUNTER = "registration_count"
STEP_CONFIRMATION_EMAIL = "confirmation_email"
STEP_REMINDER = "reminder"
STEP_NOTIFICATION = "notification"
STEP_REMINDER_CLEANUP = "reminder_cleanup"


class RegistrationInProgressError(RuntimeError):
    """Raised when a registration change is requested while another is running."""


class AlreadyRegisteredError(ValueError):
    """Raised when the user already holds a registration for the event."""


@dataclass
class RegistrationForm:
    full_name: str
    roll_number: str
    branch: str
    section: str

    def cleaned(self) -> "RegistrationForm":
        return RegistrationForm(
            full_name=ensure_full_name(self.full_name),
            roll_number=ensure_roll_number(self.roll_number),
            branch=ensure_branch(self.branch),
            section=ensure_section(self.section),
        )


@dataclass
class RegistrationResult:
    """Outcome of a workflow run; ``failed_steps`` lists best-effort failures."""

    state: str
    registration: Optional[Registration] = None
    failed_steps: list[str] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        return not self.failed_steps


async def find_registration(
    store: StoreClient, user_id: int, event_id: int
) -> Optional[Registration]:
    rows = await store.select(
        "registrations", filters={"event_id": event_id, "user_id": user_id}, limit=1
    )
    return row_to_entity(Registration, rows[0]) if rows else None


async def recompute_registration_count(store: StoreClient, event_id: int) -> int:
    """Store the number of registrations for ``event_id`` on the event row."""

    count = await store.count("registrations", filters={"event_id": event_id})
    await store.update("events", event_id, {"registration_count": count})
    return count


class RegistrationWorkflow:
    """Register or unregister one user for one event.

    The registration row is the primary write. Counter refresh, confirmation
    email, default reminder and in-app notification follow as best-effort
    steps whose failures are logged and reported but never rolled back.
    """

    def __init__(
        self,
        store: StoreClient,
        user: User,
        event: Event,
        registration: Optional[Registration] = None,
    ) -> None:
        self.store = store
        self.user = user
        self.event = event
        self.registration = registration
        self.state = REGISTERED if registration is not None else UNREGISTERED

    @classmethod
    async def load(cls, store: StoreClient, user: User, event: Event) -> "RegistrationWorkflow":
        registration = await find_registration(store, user.id, event.id)
        return cls(store, user, event, registration)

    async def register(self, form: RegistrationForm) -> RegistrationResult:
        if not self.user.has_role(ROLE_STUDENT):
            raise PermissionError("Only students can register for events.")
        if self.state in (REGISTERING, UNREGISTERING):
            raise RegistrationInProgressError("A registration request is already in progress.")
        if self.state == REGISTERED:
            raise AlreadyRegisteredError("You are already registered for this event.")
        self.state = REGISTERING
        try:
            cleaned = form.cleaned()
            if self.event.is_past:
                raise ValueError("Registration is closed for past events.")
            if await find_registration(self.store, self.user.id, self.event.id):
                raise AlreadyRegisteredError("You are already registered for this event.")
            self.registration = await self._insert_registration(cleaned)
        except BaseException:
            self.state = UNREGISTERED
            raise
        self.state = REGISTERED
        logger.info("User %s registered for event %s", self.user.id, self.event.id)

        result = RegistrationResult(state=self.state, registration=self.registration)
        await self._attempt(result, STEP_COUNTER, self._refresh_counter)
        if self.user.email and self.user.wants_email("event_reminders"):
            await self._attempt(result, STEP_CONFIRMATION_EMAIL, self._send_confirmation)
        await self._attempt(result, STEP_REMINDER, self._schedule_reminder)
        await self._attempt(result, STEP_NOTIFICATION, self._notify)
        return result

    async def unregister(self) -> RegistrationResult:
        if self.state in (REGISTERING, UNREGISTERING):
            raise RegistrationInProgressError("A registration request is already in progress.")
        if self.state != REGISTERED or self.registration is None:
            raise ValueError("You are not registered for this event.")
        self.state = UNREGISTERING
        try:
            await delete_row(self.store, "registrations", self.registration.id)
        except BaseException:
            self.state = REGISTERED
            raise
        removed = self.registration
        self.registration = None
        self.state = UNREGISTERED
        logger.info("User %s unregistered from event %s", self.user.id, self.event.id)

        result = RegistrationResult(state=self.state, registration=removed)
        await self._attempt(result, STEP_COUNTER, self._refresh_counter)
        await self._attempt(result, STEP_REMINDER_CLEANUP, self._remove_reminders)
        return result

    async def _insert_registration(self, form: RegistrationForm) -> Registration:
        values = {
            "event_id": self.event.id,
            "user_id": self.user.id,
            "full_name": form.full_name,
            "email": self.user.email,
            "roll_number": form.roll_number,
            "branch": form.branch,
            "section": form.section,
            "title": self.event.title,
            "date": self.event.date,
            "time": self.event.time,
            "venue": self.event.venue,
            "club_name": self.event.club_name,
        }
        try:
            row = await create_row(self.store, "registrations", values)
        except StoreError as exc:
            if await find_registration(self.store, self.user.id, self.event.id):
                raise AlreadyRegisteredError(
                    "You are already registered for this event."
                ) from exc
            raise
        return row_to_entity(Registration, row)

    async def _attempt(
        self,
        result: RegistrationResult,
        step: str,
        action: Callable[[], Awaitable[object]],
    ) -> None:
        try:
            outcome = await action()
        except Exception:
            logger.exception(
                "Step '%s' failed for user %s on event %s", step, self.user.id, self.event.id
            )
            result.failed_steps.append(step)
            return
        if outcome is False:
            logger.warning(
                "Step '%s' did not complete for user %s on event %s",
                step,
                self.user.id,
                self.event.id,
            )
            result.failed_steps.append(step)

    async def _refresh_counter(self) -> int:
        count = await recompute_registration_count(self.store, self.event.id)
        self.event.registration_count = count
        return count

    async def _send_confirmation(self) -> bool:
        return await anyio.to_thread.run_sync(
            partial(
                send_registration_confirmation_email,
                self.user.email,
                self.event.title,
                format_date(self.event.date),
                format_time(self.event.time),
                self.event.venue,
            )
        )

    async def _schedule_reminder(self) -> object:
        reminder_time = get_default_reminder_time(self.event.date, self.event.time)
        return await create_reminder(self.store, self.user, self.event, reminder_time)

    async def _notify(self) -> object:
        return await notify_registration_success(
            self.store,
            user_id=self.user.id,
            event_id=self.event.id,
            event_title=self.event.title,
        )

    async def _remove_reminders(self) -> int:
        return await delete_unsent_reminders(self.store, self.user.id, self.event.id)
