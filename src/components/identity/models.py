"""
Identity component models.

Validated value types for subscriber identity. Instances only exist for
input that passed validation, so downstream code never re-checks them.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SubscriberName:
    """Display name, stored verbatim (not trimmed)."""

    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class SubscriberEmail:
    """Syntactically valid email address."""

    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class NewSubscriber:
    """A registration request that passed validation."""

    name: SubscriberName
    email: SubscriberEmail
