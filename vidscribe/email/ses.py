"""
vidscribe.email.ses - AWS SES provider using boto3.

SES has no scheduled sending; a requested schedule is logged and the
message goes out immediately.
"""

from __future__ import annotations

import logging
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from vidscribe.config import EmailConfig
from vidscribe.email.base import EmailProvider
from vidscribe.email.models import EmailMessage, SendResult

logger = logging.getLogger(__name__)

SES_TEST_RECIPIENT = "success@simulator.amazonses.com"

ERROR_HINTS = {
    "MessageRejected": (
        "Email rejected. Common causes: unverified sender, sandbox mode "
        "restrictions, or invalid recipient."
    ),
    "Throttling": "Rate limit exceeded. Consider implementing retry with backoff.",
    "LimitExceededException": "Rate limit exceeded. Consider implementing retry with backoff.",
    "ConfigurationSetDoesNotExist": "Configuration set not found. Check your SES configuration.",
}


class SesProvider(EmailProvider):
    """Sends mail through AWS SES."""

    name = "ses"

    def __init__(self, config: EmailConfig, client: Any | None = None) -> None:
        super().__init__(config)
        self._init_warning_logged = False
        self.client = client if client is not None else self._create_client()

    def _create_client(self) -> Any | None:
        ses = self.config.ses
        if not ses.has_credentials:
            self._warn_not_configured()
            return None

        client = boto3.client(
            "ses",
            region_name=ses.region,
            aws_access_key_id=ses.access_key_id,
            aws_secret_access_key=ses.secret_access_key,
        )
        logger.info("[SES] Client initialized for region: %s", ses.region)
        return client

    def _warn_not_configured(self) -> None:
        if self._init_warning_logged:
            return
        self._init_warning_logged = True
        logger.warning(
            "[SES] AWS SES credentials not configured. Set AWS_SES_ACCESS_KEY_ID "
            "and AWS_SES_SECRET_ACCESS_KEY to enable email sending."
        )

    def default_from(self) -> str | None:
        if self.config.ses.from_email:
            return self.config.ses.from_email
        return super().default_from()

    def send(self, message: EmailMessage) -> SendResult:
        if self.client is None:
            logger.warning(
                "[SES] Skipping email to %s - SES client not initialized", message.recipient
            )
            return SendResult(success=False, error="SES client not initialized")

        if message.scheduled_at:
            logger.warning(
                "[SES] Scheduled emails not supported by AWS SES. Email to %s will be "
                "sent immediately (requested: %s)",
                message.recipient,
                message.scheduled_at,
            )

        if self.skip_marketing(message):
            return SendResult(success=True, skipped=True)

        sender = self.resolve_from(message)
        if not sender:
            logger.error("[SES] No valid from address configured. Set AWS_SES_FROM_EMAIL.")
            return SendResult(success=False, error="No from address configured")

        to_address = SES_TEST_RECIPIENT if message.test else message.recipient

        try:
            response = self.client.send_email(
                Source=sender,
                Destination={"ToAddresses": [to_address]},
                Message={
                    "Subject": {"Data": message.subject, "Charset": "UTF-8"},
                    "Body": {
                        "Html": {"Data": message.content.html, "Charset": "UTF-8"},
                        "Text": {"Data": message.content.text, "Charset": "UTF-8"},
                    },
                },
            )
        except ClientError as e:
            error = e.response.get("Error", {})
            error_code = error.get("Code") or "Unknown"
            error_message = error.get("Message") or str(e)
            return self._failure(to_address, sender, message.subject, error_code, error_message)
        except BotoCoreError as e:
            return self._failure(
                to_address, sender, message.subject, type(e).__name__, str(e)
            )

        message_id = response.get("MessageId")
        logger.info(
            "[SES] Email sent successfully to %s (MessageId: %s)", to_address, message_id
        )
        return SendResult(success=True, message_id=message_id)

    def _failure(
        self,
        to_address: str,
        sender: str,
        subject: str,
        error_code: str,
        error_message: str,
    ) -> SendResult:
        logger.error(
            "[SES] Failed to send email to %s: %s (%s)",
            to_address,
            error_message,
            error_code,
            extra={"subject": subject, "from": sender},
        )
        hint = ERROR_HINTS.get(error_code)
        if hint:
            logger.error("[SES] %s", hint)
        return SendResult(success=False, error=error_message, error_code=error_code)
