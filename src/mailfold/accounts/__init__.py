"""Account management module for multi-account support."""

from mailfold.accounts.config import (
    AccountConfig,
    IMAPBackendConfig,
    MaildirBackendConfig,
    SendmailBackendConfig,
    SMTPBackendConfig,
)
from mailfold.accounts.credentials import (
    CredentialBackend,
    EnvCredentialBackend,
    KeyringCredentialBackend,
)
from mailfold.accounts.materializer import SecretMaterializer
from mailfold.accounts.secrets import KeyringSecret, RawSecret
from mailfold.accounts.service import AccountService

__all__ = [
    "AccountConfig",
    "AccountService",
    "CredentialBackend",
    "EnvCredentialBackend",
    "IMAPBackendConfig",
    "KeyringCredentialBackend",
    "KeyringSecret",
    "MaildirBackendConfig",
    "RawSecret",
    "SMTPBackendConfig",
    "SecretMaterializer",
    "SendmailBackendConfig",
]
