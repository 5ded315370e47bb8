"""Schemas for the transactional email endpoint."""

from pydantic import BaseModel


class SendEmailRequest(BaseModel):
    """Request body; missing fields are reported by the endpoint itself."""

    to: str | None = None
    subject: str | None = None
    html: str | None = None
    text: str | None = None


class SendEmailResponse(BaseModel):
    success: bool
    message: str


__all__ = ["SendEmailRequest", "SendEmailResponse"]
