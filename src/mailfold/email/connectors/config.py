"""Connector configuration models.

These are the fully materialized configs handed to connectors. Builders in
this module refuse account backends whose password is still deferred.
"""

from pydantic import BaseModel, SecretStr

from mailfold.accounts.config import IMAPBackendConfig, SMTPBackendConfig
from mailfold.accounts.secrets import RawSecret, Secret
from mailfold.exceptions import UnresolvedSecretError


class IMAPConfig(BaseModel):
    """IMAP server configuration."""

    host: str
    port: int = 993
    username: str
    password: SecretStr | None = None  # None = no authentication
    ssl: bool = True


class SMTPConfig(BaseModel):
    """SMTP server configuration."""

    host: str
    port: int = 587
    username: str
    password: SecretStr | None = None  # None = no authentication
    ssl: bool = False  # False = use STARTTLS, True = use SSL


def _password(account: str, field: str, secret: Secret) -> SecretStr | None:
    if not isinstance(secret, RawSecret):
        raise UnresolvedSecretError(account, field)
    if secret.is_empty():
        return None
    return SecretStr(secret.raw)


def build_imap_config(account: str, backend: IMAPBackendConfig) -> IMAPConfig:
    """Build the IMAP connector config of a materialized account backend.

    Raises:
        UnresolvedSecretError: If the password is still a keyring reference.
    """
    return IMAPConfig(
        host=backend.host,
        port=backend.port,
        username=backend.login,
        password=_password(account, "backend.password", backend.password),
        ssl=backend.ssl,
    )


def build_smtp_config(account: str, backend: SMTPBackendConfig) -> SMTPConfig:
    """Build the SMTP connector config of a materialized account backend.

    Raises:
        UnresolvedSecretError: If the password is still a keyring reference.
    """
    return SMTPConfig(
        host=backend.host,
        port=backend.port,
        username=backend.login,
        password=_password(account, "sending_backend.password", backend.password),
        ssl=backend.ssl,
    )
