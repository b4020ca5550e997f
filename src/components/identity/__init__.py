"""
Identity component.

Syntactic validation of subscriber names and email addresses.
"""

from src.components.identity.component import (
    EMAIL_REGEX,
    FORBIDDEN_NAME_CHARACTERS,
    MAX_NAME_GRAPHEMES,
    count_graphemes,
    validate_email,
    validate_name,
    validate_new_subscriber,
)
from src.components.identity.models import NewSubscriber, SubscriberEmail, SubscriberName

__all__ = [
    # Validators
    "validate_name",
    "validate_email",
    "validate_new_subscriber",
    "count_graphemes",
    # Constants
    "EMAIL_REGEX",
    "FORBIDDEN_NAME_CHARACTERS",
    "MAX_NAME_GRAPHEMES",
    # Models
    "NewSubscriber",
    "SubscriberEmail",
    "SubscriberName",
]
