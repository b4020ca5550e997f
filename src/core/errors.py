"""
Shared error taxonomy.

Every failure that crosses a component boundary is one of these classes.
The HTTP layer translates them to responses in one place (src/api/errors.py);
components never build responses themselves.

Kinds:
- ValidationError: malformed name/email (client error, never retried)
- TokenNotFoundError: confirmation token does not resolve to a subscriber
- StoreError: any persistence read/write failure
- DeliveryError: the email gateway did not deliver a message
- AuthorizationError: caller may not publish
"""

from __future__ import annotations

from typing import Any


class MailingListError(Exception):
    """Base error. Carries a stable code and operator-facing context."""

    code: str = "error"

    def __init__(self, message: str, **context: Any) -> None:
        self.message = message
        self.context = context
        super().__init__(message)

    def __str__(self) -> str:
        if not self.context:
            return self.message
        details = ", ".join(f"{k}={v}" for k, v in sorted(self.context.items()))
        return f"{self.message} ({details})"


class ValidationError(MailingListError):
    """Input failed syntactic validation."""

    code = "validation_error"

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(message, field=field)


class TokenNotFoundError(MailingListError):
    """Confirmation token is unknown."""

    code = "token_not_found"

    def __init__(self) -> None:
        super().__init__("Unknown subscription token")


class StoreError(MailingListError):
    """Persistence failure."""

    code = "store_error"

    def __init__(self, operation: str, reason: str, **context: Any) -> None:
        self.operation = operation
        self.reason = reason
        super().__init__(f"Store operation '{operation}' failed: {reason}", **context)


class DeliveryError(MailingListError):
    """Email gateway failed to deliver a message."""

    code = "delivery_error"

    def __init__(self, operation: str, recipient: str, reason: str) -> None:
        self.operation = operation
        self.recipient = recipient
        self.reason = reason
        super().__init__(
            f"Failed to send email to {recipient}: {reason}",
            operation=operation,
        )


class AuthorizationError(MailingListError):
    """Caller could not be authenticated."""

    code = "authorization_error"

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__("Authentication failed", reason=reason)
