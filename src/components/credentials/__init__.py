"""
Credentials component.

Basic-auth credential validation for publishing.
"""

from src.components.credentials.component import DUMMY_PASSWORD_HASH, validate_credentials
from src.components.credentials.models import Credentials, StoredCredentials
from src.components.credentials.ports import CredentialStorePort, PasswordHasherPort

__all__ = [
    "validate_credentials",
    "DUMMY_PASSWORD_HASH",
    "Credentials",
    "StoredCredentials",
    "CredentialStorePort",
    "PasswordHasherPort",
]
