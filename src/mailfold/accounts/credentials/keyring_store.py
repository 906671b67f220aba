"""System keyring credential backend."""

import logging

import keyring
from keyring.errors import KeyringError
from pydantic import SecretStr

from mailfold.accounts.credentials.base import CredentialBackend
from mailfold.exceptions import CredentialNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_SERVICE_NAME = "mailfold"


class KeyringCredentialBackend(CredentialBackend):
    """Credential backend using the operating system keyring.

    Every secret is an entry of a single keyring service (default:
    "mailfold"), with the store key as the entry's user name.
    """

    kind = "keyring"

    def __init__(self, service_name: str = DEFAULT_SERVICE_NAME) -> None:
        self._service_name = service_name

    @property
    def service_name(self) -> str:
        return self._service_name

    def get_secret(self, key: str) -> SecretStr:
        """Retrieve a secret from the keyring.

        Raises:
            CredentialNotFoundError: If the entry is missing or the keyring
                cannot be accessed.
        """
        logger.debug("Looking up secret (service=%s, key=%s)", self._service_name, key)
        try:
            value = keyring.get_password(self._service_name, key)
        except KeyringError as e:
            raise CredentialNotFoundError(key, self.kind, str(e)) from e
        if value is None:
            raise CredentialNotFoundError(key, self.kind, "no such entry")
        return SecretStr(value)

    def set_secret(self, key: str, value: str) -> None:
        """Store a secret in the keyring.

        Raises:
            CredentialNotFoundError: If the keyring refuses the write.
        """
        try:
            keyring.set_password(self._service_name, key, value)
        except KeyringError as e:
            raise CredentialNotFoundError(key, self.kind, f"cannot store entry: {e}") from e
        logger.info("Stored secret in keyring (service=%s, key=%s)", self._service_name, key)
