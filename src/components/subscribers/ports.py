"""
Subscribers component ports.

Protocol interface for subscriber persistence.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Protocol
from uuid import UUID

from src.components.identity.models import NewSubscriber
from src.components.subscribers.models import (
    ConfirmedSubscriber,
    RegistrationReceipt,
    RowResult,
    Subscriber,
)


class SubscriberStorePort(Protocol):
    """
    Subscriber store interface.

    Owns subscriber rows and confirmation tokens. All failures surface
    as StoreError.
    """

    def register(self, new_subscriber: NewSubscriber) -> RegistrationReceipt:
        """
        Insert a pending subscriber and a fresh token as one atomic unit.

        Either both rows are committed or neither is visible.
        """
        ...

    def get_subscriber_id_by_token(self, token: str) -> UUID | None:
        """Resolve a confirmation token to its subscriber id."""
        ...

    def mark_confirmed(self, subscriber_id: UUID) -> None:
        """Set status to confirmed. Idempotent."""
        ...

    def list_confirmed(self) -> Iterator[RowResult[ConfirmedSubscriber]]:
        """
        Lazily yield every confirmed subscriber, in storage order.

        Rows whose stored email no longer validates are yielded as failures
        rather than aborting the read.
        """
        ...

    def get_by_id(self, subscriber_id: UUID) -> Subscriber | None:
        """Get subscriber by ID."""
        ...
