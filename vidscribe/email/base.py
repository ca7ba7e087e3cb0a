"""
vidscribe.email.base - Provider interface and sender resolution.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from vidscribe.config import EmailConfig
from vidscribe.email.models import EmailMessage, SendResult


class EmailProvider(ABC):
    """A transactional email backend.

    Instances are long-lived handles created once from EmailConfig and
    passed to every send call.
    """

    name: str = "base"

    def __init__(self, config: EmailConfig) -> None:
        self.config = config

    @abstractmethod
    def send(self, message: EmailMessage) -> SendResult:
        """Send a message, reporting failure in the result rather than raising."""

    def close(self) -> None:
        """Release any client held by the provider."""

    def default_from(self) -> str | None:
        """Sender for non-marketing mail on a self-hosted deployment."""
        if self.config.from_domain:
            return f"auth@{self.config.from_domain}"
        return None

    def resolve_from(self, message: EmailMessage) -> str | None:
        """Pick the sender address for a message.

        Marketing mail uses the marketing sender, hosted deployments use
        the hosted sender, everything else falls back to the provider's
        default.
        """
        if message.marketing:
            return self.config.marketing_from
        if self.config.hosted:
            return self.config.hosted_from
        return self.default_from()

    def skip_marketing(self, message: EmailMessage) -> bool:
        """Marketing mail is only sent from hosted deployments."""
        return message.marketing and not self.config.hosted
