"""
Credentials component ports.
"""

from __future__ import annotations

from typing import Protocol

from src.components.credentials.models import StoredCredentials


class CredentialStorePort(Protocol):
    """Lookup of stored password hashes."""

    def get_stored_credentials(self, username: str) -> StoredCredentials | None:
        """Get the hash for a username, or None if unknown."""
        ...


class PasswordHasherPort(Protocol):
    """Password hashing primitive."""

    def hash_password(self, password: str) -> str:
        ...

    def verify_password(self, password: str, hash_str: str) -> bool:
        ...
