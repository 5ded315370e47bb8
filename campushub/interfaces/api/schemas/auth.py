"""Authentication related schemas."""

from pydantic import BaseModel, EmailStr, Field, field_validator


class Token(BaseModel):
    access_token: str
    token_type: str
    role: str


class SignupRequest(BaseModel):
    full_name: str | None = Field(default=None, description="Display name split into first and last name")
    email: EmailStr
    password: str
    role: str = "student"

    @field_validator("full_name")
    @classmethod
    def validate_full_name(cls, value: str | None) -> str | None:
        if value is None:
            return None
        if len(value.strip()) < 2:
            raise ValueError("Full name must be at least 2 characters.")
        return value.strip()


__all__ = ["Token", "SignupRequest"]
