"""
Email Gateway port.

Protocol for delivering a single email. Consumed by the registration flow
(confirmation email) and the newsletter dispatcher (one call per subscriber).

Implementations:
1. PostmarkEmailGateway: JSON over HTTP to a Postmark-style API
2. DevEmailAdapter: logs the email and keeps it in memory (dev/test)

Contract:
- send() never raises for delivery problems; it returns EmailResult.failed
- callers decide what a failed result means (the dispatcher aborts)
- failures are opaque and never retried
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum
from typing import Protocol


class EmailStatus(Enum):
    """Email send result status."""

    SENT = "sent"
    FAILED = "failed"
    SKIPPED = "skipped"  # Dev adapter: logged, not transmitted


@dataclass
class EmailResult:
    """Result of an email send attempt."""

    status: EmailStatus
    recipient: str = ""
    message_id: str | None = None  # Provider's message ID
    error: str | None = None
    sent_at: datetime | None = None

    @property
    def delivered(self) -> bool:
        """True unless the gateway reported a failure."""
        return self.status != EmailStatus.FAILED

    @classmethod
    def success(cls, recipient: str, message_id: str | None = None) -> EmailResult:
        """Create a successful send result."""
        return cls(
            status=EmailStatus.SENT,
            recipient=recipient,
            message_id=message_id,
            sent_at=datetime.now(UTC),
        )

    @classmethod
    def skipped(cls, recipient: str, message_id: str | None = None) -> EmailResult:
        """Create a skipped result (dev adapter)."""
        return cls(
            status=EmailStatus.SKIPPED,
            recipient=recipient,
            message_id=message_id,
            error="Dev mode - email logged, not sent",
        )

    @classmethod
    def failed(cls, recipient: str, error: str) -> EmailResult:
        """Create a failed result."""
        return cls(
            status=EmailStatus.FAILED,
            recipient=recipient,
            error=error,
        )


class EmailGatewayPort(Protocol):
    """Delivers one email to one recipient."""

    def send(
        self,
        recipient: str,
        subject: str,
        html_body: str,
        text_body: str,
    ) -> EmailResult:
        """
        Send an email.

        Args:
            recipient: Email address of recipient
            subject: Subject line
            html_body: HTML rendering of the content
            text_body: Plain text rendering of the content

        Returns:
            EmailResult; status FAILED on network/provider errors
        """
        ...
