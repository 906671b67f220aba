"""Lazy materialization of deferred account credentials."""

from collections.abc import Iterable

import structlog

from mailfold.accounts.config import AccountConfig
from mailfold.accounts.credentials.base import CredentialBackend
from mailfold.accounts.secrets import RawSecret
from mailfold.exceptions import CredentialNotFoundError, SecretResolutionError

logger = structlog.get_logger()

# Backend kind x store kind combinations able to resolve a password.
SUPPORTED_PAIRINGS: frozenset[tuple[str, str]] = frozenset(
    {
        ("imap", "keyring"),
        ("imap", "env"),
        ("smtp", "keyring"),
        ("smtp", "env"),
    }
)

# Account slots that may hold a backend owning a password.
_SLOTS = ("backend", "sending_backend")


class SecretMaterializer:
    """Replace deferred passwords of a resolved account with store values.

    Materialization runs once per resolved account, right before the account
    is handed to a backend constructor. Each resolved reference is replaced in
    place by a ``RawSecret``, so calling ``materialize`` again on the same
    account performs no further store lookups.
    """

    def __init__(
        self,
        store: CredentialBackend,
        enabled_backends: Iterable[str] | None = None,
    ) -> None:
        """Initialize the materializer.

        Args:
            store: Secret store queried for deferred references.
            enabled_backends: Backend kinds whose credentials may be resolved,
                or None to enable every kind.
        """
        self._store = store
        self._enabled = None if enabled_backends is None else frozenset(enabled_backends)

    def is_enabled(self, backend_kind: str) -> bool:
        """Check if passwords of a backend kind are resolved with this store."""
        if self._enabled is not None and backend_kind not in self._enabled:
            return False
        return (backend_kind, self._store.kind) in SUPPORTED_PAIRINGS

    def materialize(self, name: str, account: AccountConfig) -> None:
        """Resolve every deferred password of an account in place.

        Args:
            name: The account name, used to derive store keys.
            account: The account configuration, mutated in place.

        Raises:
            SecretResolutionError: If a store lookup fails. The failing field
                is left untouched.
        """
        for slot in _SLOTS:
            backend = getattr(account, slot)
            if backend is None or not backend.needs_credentials:
                continue

            if not self.is_enabled(backend.type):
                logger.debug(
                    "secret_resolution_skipped",
                    account=name,
                    backend=backend.type,
                    store=self._store.kind,
                )
                continue

            secret = backend.password
            if isinstance(secret, RawSecret):
                continue

            field = f"{slot}.password"
            key = secret.key_for(name, backend.type)
            backend.password = self._lookup(name, field, key)

    def _lookup(self, name: str, field: str, key: str) -> RawSecret:
        logger.debug("secret_lookup", account=name, field=field, key=key, store=self._store.kind)
        try:
            value = self._store.get_secret(key)
        except CredentialNotFoundError as e:
            logger.warning(
                "secret_lookup_failed",
                account=name,
                field=field,
                key=key,
                reason=e.reason,
            )
            raise SecretResolutionError(name, field) from e
        return RawSecret(raw=value.get_secret_value())
