"""Utility helpers for sending transactional email notifications via SendGrid."""

from __future__ import annotations

import html
import json
import logging
import re
from datetime import datetime
from typing import Any

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from campushub.config import get_settings

logger = logging.getLogger(__name__)

_TAG_PATTERN = re.compile(r"<[^>]*>")
_SIGNATURE = "<p>Best regards,<br>Campus Hub Team</p>"


def _extract_sendgrid_error_details(body: Any) -> str | None:
    """Return a human readable description for a SendGrid error payload."""

    if body in (None, ""):
        return None

    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError:
            return None

    if isinstance(body, str):
        body = body.strip()
        if not body:
            return None
        try:
            parsed = json.loads(body)
        except json.JSONDecodeError:
            return body
    else:
        parsed = body

    if isinstance(parsed, dict):
        errors = parsed.get("errors")
        if isinstance(errors, list):
            messages = [
                str(item["message"])
                for item in errors
                if isinstance(item, dict) and item.get("message")
            ]
            if messages:
                return "; ".join(messages)
        try:
            return json.dumps(parsed)
        except (TypeError, ValueError):
            return None

    return None


def _log_sendgrid_exception(exc: Exception) -> None:
    """Log a SendGrid API error with helpful troubleshooting details."""

    status_code = getattr(exc, "status_code", None)
    details = _extract_sendgrid_error_details(getattr(exc, "body", None))

    if status_code and details:
        logger.error(
            "SendGrid API request failed with status %s: %s", status_code, details
        )
    elif status_code:
        logger.error("SendGrid API request failed with status %s", status_code)
    else:
        logger.exception("Error sending email via SendGrid: %s", exc)


def html_to_text(content: str) -> str:
    """Strip tags from ``content`` to build a plain-text fallback."""

    return html.unescape(_TAG_PATTERN.sub("", content)).strip()


def is_email_configured() -> bool:
    settings = get_settings()
    return bool(settings.sendgrid_api_key and settings.sendgrid_sender)


def send_email(
    subject: str,
    html_content: str,
    recipient: str,
    *,
    text_content: str | None = None,
) -> bool:
    """Send an email using the configured SendGrid credentials."""

    settings = get_settings()
    if not is_email_configured():
        logger.info("SendGrid configuration incomplete; skipping email delivery")
        return False

    message = Mail(
        from_email=settings.sendgrid_sender,
        to_emails=recipient,
        subject=subject,
        html_content=html_content,
        plain_text_content=text_content or html_to_text(html_content),
    )

    try:
        client = SendGridAPIClient(settings.sendgrid_api_key)
        response = client.send(message)
    except Exception as exc:  # pragma: no cover - network failures depend on environment
        _log_sendgrid_exception(exc)
        return False

    status_code = getattr(response, "status_code", None)
    if not isinstance(status_code, int) or not 200 <= status_code < 300:
        details = _extract_sendgrid_error_details(getattr(response, "body", None))
        logger.error("SendGrid API responded with status %s: %s", status_code, details)
        return False

    logger.info("Email '%s' sent to %s", subject, recipient)
    return True


def _event_card(title: str, rows: list[tuple[str, str]], *, style: str) -> str:
    details = "".join(
        f'<p style="margin: 5px 0;"><strong>{label}:</strong> {html.escape(value)}</p>'
        for label, value in rows
    )
    return (
        f'<div style="{style}">'
        f'<h3 style="margin: 0 0 10px 0; color: #2563eb;">{html.escape(title)}</h3>'
        f"{details}</div>"
    )


def _wrap(body: str) -> str:
    return (
        '<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">'
        f"{body}{_SIGNATURE}</div>"
    )


def send_registration_confirmation_email(
    recipient: str, event_title: str, event_date: str, event_time: str, venue: str
) -> bool:
    subject = f"Registration Confirmed: {event_title}"
    html_content = _wrap(
        '<h2 style="color: #333;">Registration Confirmed!</h2>'
        "<p>Hi there!</p>"
        "<p>Your registration for the following event has been confirmed:</p>"
        + _event_card(
            event_title,
            [("Date", event_date), ("Time", event_time), ("Venue", venue)],
            style=(
                "background-color: #f0f9ff; padding: 20px; border-radius: 8px; "
                "margin: 20px 0; border-left: 4px solid #2563eb;"
            ),
        )
        + "<p>We look forward to seeing you there!</p>"
    )
    return send_email(subject, html_content, recipient)


def send_reminder_email(
    recipient: str,
    event_title: str,
    event_date: str,
    event_time: str,
    reminder_time: datetime | None = None,
) -> bool:
    if reminder_time is not None:
        reminder_text = (
            f"This is a reminder set for {reminder_time.strftime('%Y-%m-%d %H:%M')}."
        )
    else:
        reminder_text = "This is your event reminder."
    subject = f"Reminder: {event_title} is coming up!"
    html_content = _wrap(
        '<h2 style="color: #333;">Event Reminder</h2>'
        "<p>Hi there!</p>"
        f"<p>{reminder_text}</p>"
        + _event_card(
            event_title,
            [("Date", event_date), ("Time", event_time)],
            style="background-color: #f5f5f5; padding: 20px; border-radius: 8px; margin: 20px 0;",
        )
        + "<p>Don't forget to attend!</p>"
    )
    return send_email(subject, html_content, recipient)


def send_comment_notification_email(
    recipient: str, event_title: str, commenter_name: str, comment_text: str
) -> bool:
    subject = f'New comment on "{event_title}"'
    html_content = _wrap(
        '<h2 style="color: #333;">New Comment on Your Event</h2>'
        "<p>Hi there!</p>"
        f'<p>Someone commented on your past event "{html.escape(event_title)}":</p>'
        '<div style="background-color: #f5f5f5; padding: 20px; border-radius: 8px; margin: 20px 0;">'
        f'<p style="margin: 0; font-style: italic;">"{html.escape(comment_text)}"</p>'
        '<p style="margin: 10px 0 0 0; font-size: 14px; color: #666;">'
        f"- {html.escape(commenter_name)}</p></div>"
        "<p>You can view all comments on the event page.</p>"
    )
    return send_email(subject, html_content, recipient)


__all__ = [
    "html_to_text",
    "is_email_configured",
    "send_email",
    "send_registration_confirmation_email",
    "send_reminder_email",
    "send_comment_notification_email",
]
