"""Account service resolving accounts and building their backends."""

import logging

from mailfold.accounts.config import (
    AccountConfig,
    IMAPBackendConfig,
    MaildirBackendConfig,
    SendmailBackendConfig,
    SMTPBackendConfig,
)
from mailfold.accounts.materializer import SecretMaterializer
from mailfold.email.connectors.base import BaseConnector
from mailfold.email.connectors.config import build_imap_config, build_smtp_config
from mailfold.email.connectors.imap import IMAPConnector
from mailfold.email.connectors.local import MaildirConnector, SendmailConnector
from mailfold.email.connectors.smtp import SMTPConnector
from mailfold.exceptions import (
    AccountNotFoundError,
    NoDefaultAccountError,
    UnsupportedBackendError,
)

logger = logging.getLogger(__name__)

# Account names selecting the default account.
DEFAULT_ACCOUNT_ALIASES = frozenset({"default", ""})


class AccountService:
    """Service for selecting accounts of a configuration document.

    Resolution is a pure lookup. Secrets are only materialized for the one
    account that is requested through ``get_account``.
    """

    def __init__(
        self,
        accounts: dict[str, AccountConfig],
        materializer: SecretMaterializer,
    ) -> None:
        """Initialize the account service.

        Args:
            accounts: Account table of the configuration document, by name.
            materializer: Resolver for deferred account secrets.
        """
        self._accounts = accounts
        self._materializer = materializer

    def list_accounts(self) -> list[str]:
        """Return configured account names in document order."""
        return list(self._accounts.keys())

    def get_default(self) -> str | None:
        """Return the name of the first account marked default, if any.

        The document does not guarantee a single default account; when
        several are marked, the first one encountered wins.
        """
        for name, account in self._accounts.items():
            if account.is_default():
                return name
        return None

    def get_config(self, name: str) -> AccountConfig:
        """Get the configuration for an account.

        Raises:
            AccountNotFoundError: If the account name is not found.
        """
        config = self._accounts.get(name)
        if config is None:
            raise AccountNotFoundError(name)
        return config

    def resolve(self, name: str | None = None) -> tuple[str, AccountConfig]:
        """Select an account without touching its secrets.

        Args:
            name: Account name. None, "default" and "" select the default account.

        Returns:
            The account name and its configuration.

        Raises:
            NoDefaultAccountError: If the default account is requested and none is marked.
            AccountNotFoundError: If the named account does not exist.
        """
        if name is None or name in DEFAULT_ACCOUNT_ALIASES:
            default = self.get_default()
            if default is None:
                raise NoDefaultAccountError()
            return default, self._accounts[default]
        return name, self.get_config(name)

    def get_account(self, name: str | None = None) -> tuple[str, AccountConfig]:
        """Select an account and materialize its deferred secrets in place.

        Raises:
            NoDefaultAccountError: If the default account is requested and none is marked.
            AccountNotFoundError: If the named account does not exist.
            SecretResolutionError: If a secret cannot be fetched from the store.
        """
        resolved_name, account = self.resolve(name)
        logger.debug("Resolved account (requested=%r, account=%s)", name, resolved_name)
        self._materializer.materialize(resolved_name, account)
        return resolved_name, account

    def create_connectors(self, name: str | None = None) -> list[BaseConnector]:
        """Create connectors for every backend of an account.

        Raises:
            SecretResolutionError: If a secret cannot be fetched from the store.
            UnresolvedSecretError: If a backend's password could not be materialized
                because its backend/store pairing is disabled.
            UnsupportedBackendError: If a backend type has no connector.
        """
        resolved_name, account = self.get_account(name)
        connectors: list[BaseConnector] = []

        backend = account.backend
        if isinstance(backend, IMAPBackendConfig):
            connectors.append(IMAPConnector(build_imap_config(resolved_name, backend)))
        elif isinstance(backend, MaildirBackendConfig):
            connectors.append(MaildirConnector(backend.root_dir))
        elif backend is not None:
            raise UnsupportedBackendError(backend.type)

        sending = account.sending_backend
        if isinstance(sending, SMTPBackendConfig):
            connectors.append(SMTPConnector(build_smtp_config(resolved_name, sending)))
        elif isinstance(sending, SendmailBackendConfig):
            connectors.append(SendmailConnector(sending.cmd))
        elif sending is not None:
            raise UnsupportedBackendError(sending.type)

        return connectors
