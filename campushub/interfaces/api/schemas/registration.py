"""Registration schemas carrying the registration form validation messages."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from campushub.application.use_cases.registrations.validators import (
    ensure_branch,
    ensure_full_name,
    ensure_roll_number,
    ensure_section,
)


class RegistrationCreate(BaseModel):
    full_name: str
    roll_number: str
    branch: str
    section: str

    validate_full_name = field_validator("full_name")(ensure_full_name)
    validate_roll_number = field_validator("roll_number")(ensure_roll_number)
    validate_branch = field_validator("branch")(ensure_branch)
    validate_section = field_validator("section")(ensure_section)


class RegistrationRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    event_id: int
    user_id: int
    full_name: str
    email: str
    roll_number: str
    branch: str
    section: str
    title: str | None = None
    date: str | None = None
    time: str | None = None
    venue: str | None = None
    club_name: str | None = None
    registered_at: datetime | None = None


class RegistrationOutcome(BaseModel):
    state: str
    registration: RegistrationRead | None = None
    failed_steps: list[str] = Field(default_factory=list)


__all__ = ["RegistrationCreate", "RegistrationOutcome", "RegistrationRead"]
