"""
vidscribe.email - Transactional email routed to AWS SES or Resend.

The provider is chosen once from EmailConfig; the returned provider
object is the handle every send goes through.
"""

from __future__ import annotations

from vidscribe.config import EmailConfig, EmailProviderName
from vidscribe.email.base import EmailProvider
from vidscribe.email.models import EmailContent, EmailMessage, SendResult
from vidscribe.email.render import EmailRenderer, render_email
from vidscribe.email.resend import ResendProvider
from vidscribe.email.ses import SesProvider
from vidscribe.exceptions import EmailError

PROVIDERS: dict[EmailProviderName, type[EmailProvider]] = {
    EmailProviderName.SES: SesProvider,
    EmailProviderName.RESEND: ResendProvider,
}


def create_email_provider(config: EmailConfig) -> EmailProvider:
    """Build the configured provider.

    Raises:
        EmailError: If the provider name is not supported
    """
    try:
        provider_cls = PROVIDERS[EmailProviderName(config.provider)]
    except (KeyError, ValueError) as e:
        raise EmailError(f"Unknown email provider: {config.provider}") from e
    return provider_cls(config)


def send_email(provider: EmailProvider, message: EmailMessage) -> SendResult:
    """Send a message through an already-resolved provider."""
    return provider.send(message)


__all__ = [
    "EmailContent",
    "EmailMessage",
    "EmailProvider",
    "EmailRenderer",
    "ResendProvider",
    "SendResult",
    "SesProvider",
    "create_email_provider",
    "render_email",
    "send_email",
]
