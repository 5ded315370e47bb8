"""Endpoint for sending transactional email."""

import logging

import anyio
from fastapi import APIRouter, Depends, HTTPException, status

from campushub.infrastructure.email import is_email_configured, send_email
from campushub.interfaces.api.dependencies import SessionContext, get_session_context
from campushub.interfaces.api.schemas import SendEmailRequest, SendEmailResponse

router = APIRouter(prefix="/api", tags=["email"])
logger = logging.getLogger(__name__)


@router.post("/send-email", response_model=SendEmailResponse)
async def send_transactional_email(
    payload: SendEmailRequest,
    _: SessionContext = Depends(get_session_context),
) -> SendEmailResponse:
    """Send a single email through SendGrid."""

    if not payload.to or not payload.subject or not payload.html:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing required fields: to, subject, html",
        )
    if not is_email_configured():
        logger.error("Email requested but SendGrid is not configured")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Email service not configured",
        )

    sent = await anyio.to_thread.run_sync(
        lambda: send_email(payload.subject, payload.html, payload.to, text_content=payload.text)
    )
    if not sent:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to send email",
        )
    return SendEmailResponse(success=True, message="Email sent successfully")
