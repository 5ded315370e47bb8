"""Event schemas carrying the event form validation messages."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from campushub.application.use_cases.events.validators import (
    ensure_category,
    ensure_club_name,
    ensure_date,
    ensure_description,
    ensure_time,
    ensure_title,
    ensure_venue,
    normalize_tags,
)


class _EventFields(BaseModel):
    @field_validator("title", check_fields=False)
    @classmethod
    def validate_title(cls, value):
        return value if value is None else ensure_title(value)

    @field_validator("description", check_fields=False)
    @classmethod
    def validate_description(cls, value):
        return value if value is None else ensure_description(value)

    @field_validator("date", mode="before", check_fields=False)
    @classmethod
    def validate_date(cls, value):
        return value if value is None else ensure_date(value)

    @field_validator("time", check_fields=False)
    @classmethod
    def validate_time(cls, value):
        return value if value is None else ensure_time(value)

    @field_validator("venue", check_fields=False)
    @classmethod
    def validate_venue(cls, value):
        return value if value is None else ensure_venue(value)

    @field_validator("club_name", check_fields=False)
    @classmethod
    def validate_club_name(cls, value):
        return value if value is None else ensure_club_name(value)

    @field_validator("category", check_fields=False)
    @classmethod
    def validate_category(cls, value):
        return value if value is None else ensure_category(value)

    @field_validator("tags", check_fields=False)
    @classmethod
    def validate_tags(cls, value):
        return value if value is None else normalize_tags(value)


class EventCreate(_EventFields):
    title: str
    description: str
    long_description: str | None = None
    date: str
    time: str
    venue: str
    club_name: str
    club_id: int | None = None
    category: str
    tags: list[str] = Field(default_factory=list)
    image: str | None = None
    registration_link: str | None = None


class EventUpdate(_EventFields):
    model_config = ConfigDict(extra="forbid")

    title: str | None = None
    description: str | None = None
    long_description: str | None = None
    date: str | None = None
    time: str | None = None
    venue: str | None = None
    club_name: str | None = None
    club_id: int | None = None
    category: str | None = None
    tags: list[str] | None = None
    image: str | None = None
    registration_link: str | None = None


class EventRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    long_description: str | None = None
    image: str | None = None
    date: str
    time: str
    venue: str
    club_name: str
    club_id: int | None = None
    organizer_id: int
    category: str
    tags: list[str] = Field(default_factory=list)
    is_past: bool
    registration_count: int | None = 0
    registration_link: str | None = None
    created_at: datetime | None = None


class TagSuggestionRequest(BaseModel):
    description: str = ""


class TagSuggestionResponse(BaseModel):
    tags: list[str]


class CalendarLinkResponse(BaseModel):
    url: str


__all__ = [
    "CalendarLinkResponse",
    "EventCreate",
    "EventRead",
    "EventUpdate",
    "TagSuggestionRequest",
    "TagSuggestionResponse",
]
