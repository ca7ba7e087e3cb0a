"""
vidscribe.email.resend - Resend provider over its HTTP API.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from vidscribe.config import EmailConfig
from vidscribe.email.base import EmailProvider
from vidscribe.email.models import EmailMessage, SendResult

logger = logging.getLogger(__name__)

RESEND_TEST_RECIPIENT = "delivered@resend.dev"


class ResendProvider(EmailProvider):
    """Sends mail through the Resend REST API."""

    name = "resend"

    def __init__(
        self,
        config: EmailConfig,
        client: httpx.Client | None = None,
        timeout: float = 30.0,
    ) -> None:
        super().__init__(config)
        self.api_key = config.resend.api_key
        self.api_url = config.resend.api_url
        self.client = client if client is not None else httpx.Client(timeout=timeout)

    def build_payload(self, message: EmailMessage, sender: str) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "from": sender,
            "to": [RESEND_TEST_RECIPIENT if message.test else message.recipient],
            "subject": message.subject,
            "html": message.content.html,
            "text": message.content.text,
        }
        if message.scheduled_at:
            payload["scheduled_at"] = message.scheduled_at
        return payload

    def send(self, message: EmailMessage) -> SendResult:
        if not self.api_key:
            logger.warning(
                "[Resend] Skipping email to %s - RESEND_API_KEY not configured",
                message.recipient,
            )
            return SendResult(success=False, error="Resend client not initialized")

        if self.skip_marketing(message):
            return SendResult(success=True, skipped=True)

        sender = self.resolve_from(message)
        if not sender:
            logger.error("[Resend] No valid from address configured. Set RESEND_FROM_DOMAIN.")
            return SendResult(success=False, error="No from address configured")

        payload = self.build_payload(message, sender)

        try:
            response = self.client.post(
                self.api_url,
                headers={"Authorization": f"Bearer {self.api_key}"},
                json=payload,
            )
        except httpx.HTTPError as e:
            logger.error("[Resend] Request to %s failed: %s", self.api_url, e)
            return SendResult(success=False, error=str(e), error_code=type(e).__name__)

        if not response.is_success:
            logger.error(
                "[Resend] Failed to send email to %s: %s %s",
                payload["to"][0],
                response.status_code,
                response.text,
            )
            return SendResult(
                success=False,
                error=response.text,
                error_code=str(response.status_code),
            )

        # A 2xx means the mail was accepted, so the id is best-effort.
        try:
            body = response.json()
        except ValueError:
            body = None
        message_id = body.get("id") if isinstance(body, dict) else None
        if message_id is None:
            logger.warning(
                "[Resend] Accepted email to %s but no message id in response: %s",
                payload["to"][0],
                response.text[:200],
            )
        logger.info("[Resend] Email sent to %s (id: %s)", payload["to"][0], message_id)
        return SendResult(success=True, message_id=message_id)

    def close(self) -> None:
        self.client.close()
