"""
Subscription endpoints.

Endpoints:
- POST /subscriptions - Register (form fields: name, email)
- GET /subscriptions/confirm - Confirm via ?subscription_token=...

Errors are raised as MailingListError and translated by src/api/errors.py.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Form, Response, status

from src.api.deps import get_email_gateway, get_subscriber_store, get_subscription_config
from src.components.confirmation import ConfirmInput, run_confirm
from src.components.subscribers import (
    RegisterInput,
    SubscriberStorePort,
    SubscriptionConfig,
    run_register,
)
from src.core.errors import TokenNotFoundError, ValidationError
from src.core.ports.email import EmailGatewayPort

router = APIRouter()


@router.post(
    "",
    status_code=status.HTTP_200_OK,
    response_class=Response,
    responses={
        400: {"description": "Invalid name or email"},
        500: {"description": "Storage or email delivery failure"},
    },
    summary="Subscribe to the newsletter",
    description="Register a pending subscriber and send the confirmation email.",
)
def subscribe(
    name: str = Form(""),
    email: str = Form(""),
    store: SubscriberStorePort = Depends(get_subscriber_store),
    gateway: EmailGatewayPort = Depends(get_email_gateway),
    config: SubscriptionConfig = Depends(get_subscription_config),
) -> Response:
    """
    Register a new subscriber.

    Missing fields are treated as empty and fail validation (400).
    Duplicate emails are accepted and create another pending subscriber.
    """
    run_register(RegisterInput(name=name, email=email), store, gateway, config=config)
    return Response(status_code=status.HTTP_200_OK)


@router.get(
    "/confirm",
    status_code=status.HTTP_200_OK,
    response_class=Response,
    responses={
        400: {"description": "Missing subscription_token"},
        401: {"description": "Unknown subscription_token"},
        500: {"description": "Storage failure"},
    },
    summary="Confirm a pending subscriber",
)
def confirm(
    subscription_token: str | None = None,
    store: SubscriberStorePort = Depends(get_subscriber_store),
) -> Response:
    """Confirm the subscriber bound to the token. Idempotent."""
    if subscription_token is None:
        raise ValidationError("subscription_token", "subscription_token is required")

    result = run_confirm(ConfirmInput(token=subscription_token), store)
    if not result.confirmed:
        raise TokenNotFoundError()

    return Response(status_code=status.HTTP_200_OK)
