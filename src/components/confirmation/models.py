"""
Confirmation component models.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from uuid import UUID


class ConfirmOutcome(Enum):
    """Result of a confirmation attempt."""

    CONFIRMED = "confirmed"
    TOKEN_NOT_FOUND = "token_not_found"


@dataclass(frozen=True)
class ConfirmInput:
    """Input for confirming a subscription."""

    token: str


@dataclass(frozen=True)
class ConfirmOutput:
    """Output from a confirmation attempt."""

    outcome: ConfirmOutcome
    subscriber_id: UUID | None = None

    @property
    def confirmed(self) -> bool:
        return self.outcome == ConfirmOutcome.CONFIRMED
