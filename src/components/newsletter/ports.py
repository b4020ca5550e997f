"""
Newsletter component ports.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Protocol

from src.components.subscribers.models import ConfirmedSubscriber, RowResult


class ConfirmedSubscriberSourcePort(Protocol):
    """The slice of the subscriber store the dispatcher reads."""

    def list_confirmed(self) -> Iterator[RowResult[ConfirmedSubscriber]]:
        """Lazily yield confirmed subscribers, one result per stored row."""
        ...
