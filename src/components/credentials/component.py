"""
Credentials component.

Validates basic-auth credentials before a newsletter can be published.

Unknown usernames are verified against a fixed dummy hash so both failure
paths cost one argon2 verification.
"""

from __future__ import annotations

import logging
from uuid import UUID

from src.components.credentials.models import Credentials
from src.components.credentials.ports import CredentialStorePort, PasswordHasherPort
from src.core.errors import AuthorizationError

logger = logging.getLogger(__name__)

DUMMY_PASSWORD_HASH = (
    "$argon2id$v=19$m=15000,t=2,p=1$"
    "gZiV/M1gPc22ElAH/Jh1Hw$"
    "CWOrkoo7oJBQ/iyh7uJ0LO2aLEfrHwTWllSAxT0zRno"
)


def validate_credentials(
    credentials: Credentials,
    repo: CredentialStorePort,
    hasher: PasswordHasherPort,
) -> UUID:
    """
    Check a username/password pair.

    Returns:
        The user id

    Raises:
        AuthorizationError: unknown username or wrong password
        StoreError: credential lookup failed
    """
    stored = repo.get_stored_credentials(credentials.username)
    expected_hash = stored.password_hash if stored else DUMMY_PASSWORD_HASH

    password_ok = hasher.verify_password(credentials.password, expected_hash)

    if stored is None:
        logger.warning("Publish attempted with unknown username %r", credentials.username)
        raise AuthorizationError("Unknown username")
    if not password_ok:
        logger.warning("Publish attempted with invalid password for %r", credentials.username)
        raise AuthorizationError("Invalid password")

    return stored.user_id
