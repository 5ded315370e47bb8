"""Use cases for event registrations."""

from .list_registrations import list_event_registrations, list_user_registrations
from .workflow import (
    REGISTERED,
    REGISTERING,
    UNREGISTERED,
    UNREGISTERING,
    AlreadyRegisteredError,
    RegistrationForm,
    RegistrationInProgressError,
    RegistrationResult,
    RegistrationWorkflow,
    find_registration,
    recompute_registration_count,
)

__all__ = [
    "REGISTERED",
    "REGISTERING",
    "UNREGISTERED",
    "UNREGISTERING",
    "AlreadyRegisteredError",
    "RegistrationForm",
    "RegistrationInProgressError",
    "RegistrationResult",
    "RegistrationWorkflow",
    "find_registration",
    "list_event_registrations",
    "list_user_registrations",
    "recompute_registration_count",
]
