"""
Subscribers component models.

Subscriber lifecycle: pending_confirmation → confirmed (one way, once).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Generic, TypeVar
from uuid import UUID

# --- Status ---


class SubscriberStatus(Enum):
    """
    Subscriber status.

    State transitions:
    - pending_confirmation → confirmed (via confirmation link)
    - confirmed is terminal; confirming again is a no-op
    """

    PENDING_CONFIRMATION = "pending_confirmation"
    CONFIRMED = "confirmed"


# --- Entities ---


@dataclass(frozen=True)
class Subscriber:
    """Stored subscriber row."""

    id: UUID
    email: str
    name: str
    status: SubscriberStatus
    subscribed_at: datetime


@dataclass(frozen=True)
class ConfirmedSubscriber:
    """A confirmed subscriber whose stored email still validates."""

    email: str


T = TypeVar("T")


@dataclass(frozen=True)
class RowResult(Generic[T]):
    """
    Per-row outcome when materializing stored rows.

    Exactly one of value / error is set.
    """

    value: T | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> RowResult[T]:
        return cls(value=value)

    @classmethod
    def failure(cls, error: str) -> RowResult[T]:
        return cls(error=error)


@dataclass(frozen=True)
class RegistrationReceipt:
    """What the store hands back after an atomic registration."""

    subscriber_id: UUID
    token: str


# --- Input/Output ---


@dataclass(frozen=True)
class RegisterInput:
    """Raw registration form."""

    name: str
    email: str


@dataclass(frozen=True)
class RegisterOutput:
    """Successful registration: row committed and confirmation email handed to the gateway."""

    subscriber_id: UUID
    token: str
    confirmation_link: str


# --- Configuration ---


@dataclass(frozen=True)
class SubscriptionConfig:
    """Registration flow configuration."""

    base_url: str = "http://127.0.0.1:8000"
    confirmation_path: str = "/subscriptions/confirm"
    confirmation_subject: str = "Welcome!"
