"""
Newsletter dispatcher.

Fans one issue out to every confirmed subscriber, one gateway call each,
sequentially and in storage order.

Failure policy:
- A confirmed row whose stored email no longer validates is logged at
  WARNING and skipped; dispatch continues.
- A gateway failure aborts the whole publish immediately with
  DeliveryError. Later subscribers are not attempted. There is no
  bookkeeping, resume point or retry, so publishing again re-sends to
  everyone who already received the issue.
- The caller is assumed to be authorized.
"""

from __future__ import annotations

import logging

from src.components.newsletter.models import PublishInput, PublishOutput
from src.components.newsletter.ports import ConfirmedSubscriberSourcePort
from src.core.errors import DeliveryError
from src.core.ports.email import EmailGatewayPort

logger = logging.getLogger(__name__)


def run_publish(
    inp: PublishInput,
    store: ConfirmedSubscriberSourcePort,
    gateway: EmailGatewayPort,
) -> PublishOutput:
    """
    Send an issue to all confirmed subscribers.

    Raises:
        StoreError: the confirmed-subscriber query failed
        DeliveryError: the gateway failed for one subscriber (fan-out stops there)
    """
    delivered = 0
    skipped = 0

    for row in store.list_confirmed():
        if not row.ok or row.value is None:
            skipped += 1
            logger.warning(
                "Skipping a confirmed subscriber. Their stored email address is invalid: %s",
                row.error,
            )
            continue

        recipient = row.value.email
        result = gateway.send(recipient, inp.title, inp.html_body, inp.text_body)
        if not result.delivered:
            logger.error(
                "Newsletter delivery to %s failed after %d successful sends; aborting",
                recipient,
                delivered,
            )
            raise DeliveryError("publish", recipient, result.error or "unknown gateway error")
        delivered += 1

    logger.info("Newsletter '%s' sent to %d subscribers (%d skipped)", inp.title, delivered, skipped)
    return PublishOutput(delivered=delivered, skipped=skipped)


def run(
    inp: PublishInput,
    store: ConfirmedSubscriberSourcePort,
    gateway: EmailGatewayPort,
) -> PublishOutput:
    """Component entry point."""
    if isinstance(inp, PublishInput):
        return run_publish(inp, store, gateway)
    raise ValueError(f"Unknown input type: {type(inp)}")
