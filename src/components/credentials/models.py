"""
Credentials component models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from uuid import UUID


@dataclass(frozen=True)
class Credentials:
    """Username/password pair presented by a caller."""

    username: str
    password: str = field(repr=False)


@dataclass(frozen=True)
class StoredCredentials:
    """Credential row as kept by the user store."""

    user_id: UUID
    password_hash: str = field(repr=False)
