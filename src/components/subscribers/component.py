"""
Subscribers component.

Registration flow: validate → atomic insert of subscriber + token →
confirmation email through the gateway.

Key behaviors:
- No deduplication: registering the same email twice creates two rows
- A new token is minted on every registration
- If the confirmation email fails the row stays committed and the caller
  gets a DeliveryError (the two failure kinds stay distinct)
"""

from __future__ import annotations

import logging
import secrets
import string

from src.components.identity import validate_new_subscriber
from src.components.subscribers.models import (
    RegisterInput,
    RegisterOutput,
    SubscriptionConfig,
)
from src.components.subscribers.ports import SubscriberStorePort
from src.core.errors import DeliveryError
from src.core.ports.email import EmailGatewayPort

logger = logging.getLogger(__name__)

TOKEN_LENGTH = 25
TOKEN_ALPHABET = string.ascii_letters + string.digits


# --- Pure Functions ---


def generate_subscription_token(length: int = TOKEN_LENGTH) -> str:
    """Random alphanumeric token of fixed length."""
    return "".join(secrets.choice(TOKEN_ALPHABET) for _ in range(length))


def build_confirmation_link(
    base_url: str,
    token: str,
    path: str = "/subscriptions/confirm",
) -> str:
    """
    Build the confirmation link sent by email.

    Args:
        base_url: Public base URL of the service
        token: Subscription token
        path: Confirmation endpoint path

    Returns:
        Full confirmation URL
    """
    base = base_url.rstrip("/")
    return f"{base}{path}?subscription_token={token}"


def build_confirmation_email(confirmation_link: str) -> tuple[str, str]:
    """Return (html_body, text_body) for the confirmation email."""
    html_body = (
        "Welcome to our newsletter!<br />"
        f'Click <a href="{confirmation_link}">here</a> to confirm your subscription.'
    )
    text_body = (
        "Welcome to our newsletter!\n"
        f"Visit {confirmation_link} to confirm your subscription."
    )
    return html_body, text_body


# --- Run Handlers ---


def run_register(
    inp: RegisterInput,
    store: SubscriberStorePort,
    gateway: EmailGatewayPort,
    *,
    config: SubscriptionConfig | None = None,
) -> RegisterOutput:
    """
    Register a new subscriber and send the confirmation email.

    Raises:
        ValidationError: name or email is malformed (nothing persisted)
        StoreError: the atomic insert failed (nothing persisted)
        DeliveryError: the row is committed but the email was not delivered
    """
    cfg = config or SubscriptionConfig()

    new_subscriber = validate_new_subscriber(inp.name, inp.email)

    receipt = store.register(new_subscriber)
    logger.info("Registered subscriber %s, pending confirmation", receipt.subscriber_id)

    link = build_confirmation_link(cfg.base_url, receipt.token, cfg.confirmation_path)
    html_body, text_body = build_confirmation_email(link)

    result = gateway.send(
        new_subscriber.email.value,
        cfg.confirmation_subject,
        html_body,
        text_body,
    )
    if not result.delivered:
        raise DeliveryError(
            "send_confirmation_email",
            new_subscriber.email.value,
            result.error or "unknown gateway error",
        )

    return RegisterOutput(
        subscriber_id=receipt.subscriber_id,
        token=receipt.token,
        confirmation_link=link,
    )


def run(
    inp: RegisterInput,
    store: SubscriberStorePort,
    gateway: EmailGatewayPort,
    *,
    config: SubscriptionConfig | None = None,
) -> RegisterOutput:
    """Component entry point."""
    if isinstance(inp, RegisterInput):
        return run_register(inp, store, gateway, config=config)
    raise ValueError(f"Unknown input type: {type(inp)}")
