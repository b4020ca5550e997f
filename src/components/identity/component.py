"""
Identity validators.

Pure functions that turn raw strings into validated SubscriberName /
SubscriberEmail values, or raise ValidationError.

Name rules:
- not empty or whitespace-only
- at most 256 user-perceived characters (extended grapheme clusters)
- none of the characters < > " ` ( ) { } \\ /

Email rules:
- local-part@domain, domain with at least one dot (RFC 5322 simplified)
- no DNS or mailbox verification
"""

from __future__ import annotations

import re

import regex

from src.components.identity.models import NewSubscriber, SubscriberEmail, SubscriberName
from src.core.errors import ValidationError

MAX_NAME_GRAPHEMES = 256

FORBIDDEN_NAME_CHARACTERS = frozenset('<>"`(){}\\/')

EMAIL_REGEX = re.compile(
    r"^[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+@"
    r"[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)+$"
)

_GRAPHEME = regex.compile(r"\X")


def count_graphemes(s: str) -> int:
    """Count user-perceived characters, so 'é' written as e + U+0301 counts once."""
    return len(_GRAPHEME.findall(s))


def validate_name(raw: str) -> SubscriberName:
    """
    Validate a subscriber display name.

    Args:
        raw: Name as submitted

    Returns:
        SubscriberName wrapping the untouched input

    Raises:
        ValidationError: If the name is empty, too long or has forbidden characters
    """
    if not raw or not raw.strip():
        raise ValidationError("name", "Name must not be empty")

    if count_graphemes(raw) > MAX_NAME_GRAPHEMES:
        raise ValidationError(
            "name", f"Name must be at most {MAX_NAME_GRAPHEMES} characters long"
        )

    if any(c in FORBIDDEN_NAME_CHARACTERS for c in raw):
        raise ValidationError("name", "Name contains forbidden characters")

    return SubscriberName(raw)


def validate_email(raw: str) -> SubscriberEmail:
    """
    Validate an email address (syntax only).

    Raises:
        ValidationError: If the address is not local-part@domain.tld
    """
    if not raw or not EMAIL_REGEX.match(raw):
        raise ValidationError("email", f"'{raw}' is not a valid email address")
    return SubscriberEmail(raw)


def validate_new_subscriber(name: str, email: str) -> NewSubscriber:
    """Validate a registration request. Name is checked first."""
    return NewSubscriber(name=validate_name(name), email=validate_email(email))
