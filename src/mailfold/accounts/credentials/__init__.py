"""Credential backends for account authentication."""

from mailfold.accounts.credentials.base import CredentialBackend
from mailfold.accounts.credentials.env import EnvCredentialBackend
from mailfold.accounts.credentials.factory import create_credential_backend
from mailfold.accounts.credentials.keyring_store import KeyringCredentialBackend

__all__ = [
    "CredentialBackend",
    "EnvCredentialBackend",
    "KeyringCredentialBackend",
    "create_credential_backend",
]
