"""
Confirmation component.

Resolves a subscription token and moves its subscriber to confirmed.

Key behaviors:
- Unknown token → TOKEN_NOT_FOUND, nothing changes
- Known token → status set to confirmed unconditionally (idempotent)
- Tokens are not invalidated after use; a token can confirm again
- Read-then-write with no extra isolation; a concurrent duplicate
  confirmation is harmless because the transition is monotonic
"""

from __future__ import annotations

import logging

from src.components.confirmation.models import ConfirmInput, ConfirmOutcome, ConfirmOutput
from src.components.subscribers.ports import SubscriberStorePort

logger = logging.getLogger(__name__)


def run_confirm(inp: ConfirmInput, store: SubscriberStorePort) -> ConfirmOutput:
    """
    Confirm the subscriber bound to a token.

    Raises:
        StoreError: lookup or update failed
    """
    if not inp.token:
        return ConfirmOutput(outcome=ConfirmOutcome.TOKEN_NOT_FOUND)

    subscriber_id = store.get_subscriber_id_by_token(inp.token)
    if subscriber_id is None:
        logger.info("Confirmation attempted with an unknown token")
        return ConfirmOutput(outcome=ConfirmOutcome.TOKEN_NOT_FOUND)

    store.mark_confirmed(subscriber_id)
    logger.info("Subscriber %s confirmed", subscriber_id)

    return ConfirmOutput(outcome=ConfirmOutcome.CONFIRMED, subscriber_id=subscriber_id)


def run(inp: ConfirmInput, store: SubscriberStorePort) -> ConfirmOutput:
    """Component entry point."""
    if isinstance(inp, ConfirmInput):
        return run_confirm(inp, store)
    raise ValueError(f"Unknown input type: {type(inp)}")
