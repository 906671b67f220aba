"""Credential backend factory."""

from mailfold.accounts.credentials.base import CredentialBackend
from mailfold.accounts.credentials.env import EnvCredentialBackend
from mailfold.accounts.credentials.keyring_store import (
    DEFAULT_SERVICE_NAME,
    KeyringCredentialBackend,
)
from mailfold.exceptions import ConfigError


def create_credential_backend(
    kind: str = "keyring", service_name: str = DEFAULT_SERVICE_NAME
) -> CredentialBackend:
    """Create the secret store selected by the runtime settings.

    Raises:
        ConfigError: If the store kind is unknown.
    """
    if kind == "keyring":
        return KeyringCredentialBackend(service_name=service_name)
    if kind == "env":
        return EnvCredentialBackend()
    raise ConfigError(f"Unsupported secret backend: {kind} (supported: keyring, env)")
