"""
Dev Email Adapter.

Logs emails instead of sending them. Used for local development and tests.

Key behaviors:
- Logs recipient, subject and a body preview
- Returns SKIPPED status (not SENT)
- Stores emails in memory for test assertions
- Can be told to fail for chosen recipients, to exercise failure paths
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import uuid4

from src.core.ports.email import EmailResult

logger = logging.getLogger(__name__)


@dataclass
class SentEmail:
    """Record of a logged email for test assertions."""

    id: str
    recipient: str
    subject: str
    html_body: str
    text_body: str
    logged_at: datetime


@dataclass
class DevEmailAdapter:
    """
    Email gateway that logs instead of sending.

    Implements EmailGatewayPort.
    """

    sent_emails: list[SentEmail] = field(default_factory=list)

    # Recipients for which send() reports FAILED
    failing_recipients: set[str] = field(default_factory=set)

    log_level: int = logging.INFO
    log_body: bool = True
    body_preview_length: int = 100

    def send(
        self,
        recipient: str,
        subject: str,
        html_body: str,
        text_body: str,
    ) -> EmailResult:
        """Log an email. Returns SKIPPED, or FAILED for a failing recipient."""
        if recipient in self.failing_recipients:
            logger.warning("EMAIL (dev): simulated failure for %s", recipient)
            return EmailResult.failed(recipient, "Simulated delivery failure")

        message_id = f"dev-{uuid4().hex[:12]}"
        self.sent_emails.append(
            SentEmail(
                id=message_id,
                recipient=recipient,
                subject=subject,
                html_body=html_body,
                text_body=text_body,
                logged_at=datetime.now(UTC),
            )
        )
        self._log_email(recipient, subject, html_body, message_id)
        return EmailResult.skipped(recipient, message_id)

    def _log_email(
        self,
        recipient: str,
        subject: str,
        html_body: str,
        message_id: str,
    ) -> None:
        parts = [
            f"EMAIL (dev): To={recipient}",
            f"Subject={subject}",
        ]

        if self.log_body and html_body:
            preview = html_body[: self.body_preview_length]
            if len(html_body) > self.body_preview_length:
                preview += "..."
            parts.append(f"Body={preview}")

        parts.append(f"MessageID={message_id}")
        logger.log(self.log_level, ", ".join(parts))

    # --- Test Helper Methods ---

    def get_last_email(self) -> SentEmail | None:
        """Get the most recently logged email."""
        return self.sent_emails[-1] if self.sent_emails else None

    def get_emails_to(self, recipient: str) -> list[SentEmail]:
        """Get all emails logged to a specific recipient."""
        return [e for e in self.sent_emails if e.recipient == recipient]

    def clear(self) -> None:
        """Clear all stored emails."""
        self.sent_emails.clear()

    @property
    def email_count(self) -> int:
        return len(self.sent_emails)
