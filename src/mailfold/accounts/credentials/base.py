"""Abstract base class for credential backends."""

from abc import ABC, abstractmethod
from typing import ClassVar

from pydantic import SecretStr


class CredentialBackend(ABC):
    """Abstract interface for secret storage.

    Credential backends map store keys (e.g. "work-imap-password") to secret
    values. Different implementations can retrieve credentials from the
    system keyring, environment variables, encrypted files, etc.
    """

    #: Store kind, used to decide which backend pairings are supported.
    kind: ClassVar[str]

    #: Whether stored secrets outlive the current process.
    persistent: ClassVar[bool] = True

    @abstractmethod
    def get_secret(self, key: str) -> SecretStr:
        """Retrieve the secret stored under a key.

        Args:
            key: The store key.

        Returns:
            The secret as a SecretStr.

        Raises:
            CredentialNotFoundError: If the entry is missing or the store
                cannot be read.
        """
        ...

    def location(self, key: str) -> str:
        """Return where the operator finds the entry for a key."""
        return key

    @abstractmethod
    def set_secret(self, key: str, value: str) -> None:
        """Store a secret under a key, replacing any previous value."""
        ...
