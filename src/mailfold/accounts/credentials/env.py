"""Environment variable credential backend."""

import logging
import os
import re

from pydantic import SecretStr

from mailfold.accounts.credentials.base import CredentialBackend
from mailfold.exceptions import CredentialNotFoundError

logger = logging.getLogger(__name__)


def normalize_key(key: str) -> str:
    """Normalize a store key for use in environment variable names.

    Replaces non-alphanumeric characters with underscores and uppercases the result.

    For example:
    - "work-imap-password" -> "WORK_IMAP_PASSWORD"
    - "user@example.com-smtp-password" -> "USER_EXAMPLE_COM_SMTP_PASSWORD"
    """
    return re.sub(r"[^a-zA-Z0-9]", "_", key).upper()


class EnvCredentialBackend(CredentialBackend):
    """Credential backend using environment variables.

    Looks for secrets in environment variables named:
    MAILFOLD_SECRET_{KEY}

    Where {KEY} is the normalized store key (uppercased, non-alphanumeric
    replaced with underscores). For example, key "work-imap-password" maps to
    MAILFOLD_SECRET_WORK_IMAP_PASSWORD.
    """

    kind = "env"
    persistent = False

    def env_key(self, key: str) -> str:
        return f"MAILFOLD_SECRET_{normalize_key(key)}"

    def location(self, key: str) -> str:
        return self.env_key(key)

    def get_secret(self, key: str) -> SecretStr:
        """Retrieve a secret from its environment variable.

        Raises:
            CredentialNotFoundError: If the environment variable is not set.
        """
        env_key = self.env_key(key)

        logger.debug("Looking up secret (env_key=%s)", env_key)

        value = os.environ.get(env_key)
        if not value:
            raise CredentialNotFoundError(key, self.kind, f"{env_key} is not set")

        return SecretStr(value)

    def set_secret(self, key: str, value: str) -> None:
        """Export a secret for the current process only."""
        os.environ[self.env_key(key)] = value
