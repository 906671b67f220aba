"""Tests for AccountService."""

from unittest.mock import MagicMock, patch

import pytest
from pydantic import SecretStr

from mailfold.accounts.config import (
    AccountConfig,
    IMAPBackendConfig,
    MaildirBackendConfig,
    SendmailBackendConfig,
    SMTPBackendConfig,
)
from mailfold.accounts.credentials.base import CredentialBackend
from mailfold.accounts.materializer import SecretMaterializer
from mailfold.accounts.secrets import RawSecret
from mailfold.accounts.service import AccountService
from mailfold.email.connectors.local import MaildirConnector, SendmailConnector
from mailfold.exceptions import (
    AccountNotFoundError,
    CredentialNotFoundError,
    NoDefaultAccountError,
    SecretResolutionError,
    UnresolvedSecretError,
)


class MockCredentialBackend(CredentialBackend):
    """Mock credential backend for testing."""

    kind = "keyring"

    def __init__(self, secrets: dict[str, str]) -> None:
        self._secrets = secrets
        self.calls = 0

    def get_secret(self, key: str) -> SecretStr:
        self.calls += 1
        if key not in self._secrets:
            raise CredentialNotFoundError(key, self.kind)
        return SecretStr(self._secrets[key])

    def set_secret(self, key: str, value: str) -> None:
        self._secrets[key] = value


def _service(
    accounts: dict[str, AccountConfig], secrets: dict[str, str] | None = None
) -> AccountService:
    store = MockCredentialBackend(secrets or {})
    return AccountService(accounts, SecretMaterializer(store))


def _imap(**kwargs: object) -> IMAPBackendConfig:
    return IMAPBackendConfig(host="imap.example.com", login="me@example.com", **kwargs)


class TestResolve:
    @pytest.mark.parametrize("requested", [None, "default", ""])
    def test_default_aliases_select_default_account(self, requested: str | None) -> None:
        """Test None, "default" and "" all select the default account."""
        work = AccountConfig(default=True)
        service = _service({"personal": AccountConfig(), "work": work})

        name, account = service.resolve(requested)

        assert name == "work"
        assert account is work

    def test_named_account(self) -> None:
        """Test an explicit name is looked up directly."""
        personal = AccountConfig()
        service = _service({"personal": personal, "work": AccountConfig(default=True)})

        assert service.resolve("personal") == ("personal", personal)

    def test_no_default_account(self) -> None:
        """Test NoDefaultAccountError when no account is flagged default."""
        service = _service({"a": AccountConfig(), "b": AccountConfig(default=False)})

        with pytest.raises(NoDefaultAccountError):
            service.resolve(None)

    def test_unknown_account(self) -> None:
        """Test AccountNotFoundError carries the requested name."""
        service = _service({"work": AccountConfig(default=True)})

        with pytest.raises(AccountNotFoundError) as exc_info:
            service.resolve("nonexistent")

        assert exc_info.value.account == "nonexistent"

    def test_empty_table(self) -> None:
        """Test an empty table fails cleanly on both paths."""
        service = _service({})

        with pytest.raises(NoDefaultAccountError):
            service.resolve(None)
        with pytest.raises(AccountNotFoundError) as exc_info:
            service.resolve("work")
        assert exc_info.value.account == "work"

    def test_first_default_wins(self) -> None:
        """Test several default accounts resolve to the first encountered."""
        first = AccountConfig(default=True)
        service = _service({"first": first, "second": AccountConfig(default=True)})

        assert service.resolve() == ("first", first)

    def test_resolve_does_not_materialize(self) -> None:
        """Test resolution is a pure lookup."""
        store = MockCredentialBackend({"work-imap-password": "s3cr3t"})
        account = AccountConfig(default=True, backend=_imap())
        service = AccountService({"work": account}, SecretMaterializer(store))

        service.resolve()

        assert store.calls == 0


class TestListAccounts:
    def test_list_accounts(self) -> None:
        """Test listing account names in document order."""
        service = _service({"work": AccountConfig(), "personal": AccountConfig()})

        assert service.list_accounts() == ["work", "personal"]

    def test_list_accounts_empty(self) -> None:
        """Test listing accounts when none configured."""
        assert _service({}).list_accounts() == []

    def test_get_default_none(self) -> None:
        """Test get_default returns None without a default account."""
        assert _service({"work": AccountConfig()}).get_default() is None


class TestGetAccount:
    def test_resolve_then_materialize(self) -> None:
        """Test the default account's deferred password is materialized."""
        service = _service(
            {
                "work": AccountConfig(
                    default=True,
                    backend=_imap(password={"keyring": "work-imap-password"}),
                )
            },
            {"work-imap-password": "s3cr3t"},
        )

        name, account = service.get_account(None)

        assert name == "work"
        assert account.backend.password == RawSecret(raw="s3cr3t")

    def test_only_requested_account_is_materialized(self) -> None:
        """Test other accounts keep their deferred references."""
        other = AccountConfig(backend=_imap())
        service = _service(
            {"work": AccountConfig(default=True, backend=_imap()), "other": other},
            {"work-imap-password": "pw"},
        )

        service.get_account()

        assert not isinstance(other.backend.password, RawSecret)

    def test_resolution_error_propagates(self) -> None:
        """Test store failures surface as SecretResolutionError."""
        service = _service({"work": AccountConfig(default=True, backend=_imap())})

        with pytest.raises(SecretResolutionError) as exc_info:
            service.get_account()

        assert exc_info.value.account == "work"
        assert exc_info.value.field == "backend.password"


class TestCreateConnectors:
    @patch("mailfold.accounts.service.SMTPConnector")
    @patch("mailfold.accounts.service.IMAPConnector")
    def test_creates_imap_and_smtp_connectors(
        self,
        mock_imap: MagicMock,
        mock_smtp: MagicMock,
    ) -> None:
        """Test connectors receive materialized configs."""
        service = _service(
            {
                "work": AccountConfig(
                    default=True,
                    backend=_imap(port=143, ssl=False),
                    sending_backend=SMTPBackendConfig(
                        host="smtp.example.com", login="me@example.com", password=""
                    ),
                )
            },
            {"work-imap-password": "secret123"},
        )

        connectors = service.create_connectors()

        imap_config = mock_imap.call_args.args[0]
        assert imap_config.host == "imap.example.com"
        assert imap_config.port == 143
        assert imap_config.username == "me@example.com"
        assert imap_config.password.get_secret_value() == "secret123"
        assert imap_config.ssl is False

        smtp_config = mock_smtp.call_args.args[0]
        assert smtp_config.password is None
        assert connectors == [mock_imap.return_value, mock_smtp.return_value]

    def test_creates_local_connectors(self) -> None:
        """Test Maildir and sendmail backends need no secrets."""
        service = _service(
            {
                "local": AccountConfig(
                    backend=MaildirBackendConfig(root_dir="/var/mail/me"),
                    sending_backend=SendmailBackendConfig(),
                )
            }
        )

        connectors = service.create_connectors("local")

        assert isinstance(connectors[0], MaildirConnector)
        assert isinstance(connectors[1], SendmailConnector)
        assert connectors[1].cmd == "/usr/sbin/sendmail"

    def test_disabled_pairing_fails_at_construction(self) -> None:
        """Test a reference left deferred is refused by the backend builder."""
        store = MockCredentialBackend({})
        service = AccountService(
            {"work": AccountConfig(backend=_imap())},
            SecretMaterializer(store, enabled_backends=set()),
        )

        with pytest.raises(UnresolvedSecretError) as exc_info:
            service.create_connectors("work")

        assert exc_info.value.account == "work"
        assert store.calls == 0
