"""
Subscribers component.

Subscriber records, confirmation tokens and the registration flow.
"""

from src.components.subscribers.component import (
    TOKEN_ALPHABET,
    TOKEN_LENGTH,
    build_confirmation_email,
    build_confirmation_link,
    generate_subscription_token,
    run,
    run_register,
)
from src.components.subscribers.models import (
    ConfirmedSubscriber,
    RegisterInput,
    RegisterOutput,
    RegistrationReceipt,
    RowResult,
    Subscriber,
    SubscriberStatus,
    SubscriptionConfig,
)
from src.components.subscribers.ports import SubscriberStorePort

__all__ = [
    # Component
    "run",
    "run_register",
    # Pure functions
    "generate_subscription_token",
    "build_confirmation_link",
    "build_confirmation_email",
    # Constants
    "TOKEN_ALPHABET",
    "TOKEN_LENGTH",
    # Models
    "Subscriber",
    "SubscriberStatus",
    "ConfirmedSubscriber",
    "RowResult",
    "RegistrationReceipt",
    "SubscriptionConfig",
    # Input/Output
    "RegisterInput",
    "RegisterOutput",
    # Ports
    "SubscriberStorePort",
]
