"""
vidscribe.email.models - Message and result types shared by providers.
"""

from __future__ import annotations

from pydantic import BaseModel


class EmailContent(BaseModel, frozen=True):
    """Rendered message body in both HTML and plain text."""

    html: str
    text: str


class EmailMessage(BaseModel, frozen=True):
    """An outgoing email."""

    recipient: str
    subject: str
    content: EmailContent
    marketing: bool = False
    test: bool = False
    scheduled_at: str | None = None


class SendResult(BaseModel, frozen=True):
    """Outcome of a send attempt. Providers report failure here instead of raising."""

    success: bool
    message_id: str | None = None
    error: str | None = None
    error_code: str | None = None
    skipped: bool = False
