"""Club schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ClubCreate(BaseModel):
    name: str = Field(..., max_length=120)
    description: str = ""
    logo: str | None = None


class ClubRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str
    logo: str | None = None
    organizer_id: int
    status: str
    created_at: datetime | None = None


__all__ = ["ClubCreate", "ClubRead"]
