"""Tests for IMAP connector."""

from unittest.mock import MagicMock, patch

import pytest
from imap_tools import MailboxLoginError
from pydantic import SecretStr

from mailfold.email.connectors.config import IMAPConfig
from mailfold.email.connectors.imap import IMAPConnector


class TestIMAPConnector:
    @pytest.fixture
    def config(self) -> IMAPConfig:
        return IMAPConfig(
            host="imap.example.com",
            username="user",
            password=SecretStr("secret"),
        )

    def test_init(self, config: IMAPConfig) -> None:
        connector = IMAPConnector(config)
        assert connector.config == config
        assert connector._mailbox is None

    @patch("mailfold.email.connectors.imap.MailBox")
    def test_connect_ssl(self, mock_mailbox_class: MagicMock, config: IMAPConfig) -> None:
        mock_mailbox = MagicMock()
        mock_mailbox_class.return_value = mock_mailbox

        connector = IMAPConnector(config)
        connector.connect()

        mock_mailbox_class.assert_called_once_with("imap.example.com", 993)
        mock_mailbox.login.assert_called_once_with("user", "secret")

    @patch("mailfold.email.connectors.imap.MailBoxUnencrypted")
    def test_connect_plain(self, mock_mailbox_class: MagicMock) -> None:
        config = IMAPConfig(host="localhost", port=143, username="user", ssl=False)

        IMAPConnector(config).connect()

        mock_mailbox_class.assert_called_once_with("localhost", 143)

    @patch("mailfold.email.connectors.imap.MailBox")
    def test_connect_without_password_skips_login(self, mock_mailbox_class: MagicMock) -> None:
        """Test no login is attempted when authentication is disabled."""
        config = IMAPConfig(host="imap.example.com", username="user")

        IMAPConnector(config).connect()

        mock_mailbox_class.return_value.login.assert_not_called()

    @patch("mailfold.email.connectors.imap.MailBox")
    def test_failed_login_closes_socket(
        self, mock_mailbox_class: MagicMock, config: IMAPConfig
    ) -> None:
        """Test a rejected login shuts the connection down and leaves no session."""
        mock_mailbox = mock_mailbox_class.return_value
        mock_mailbox.login.side_effect = MailboxLoginError(("NO", [b"LOGIN failed"]), "OK")
        connector = IMAPConnector(config)

        with pytest.raises(MailboxLoginError):
            connector.connect()

        mock_mailbox.client.shutdown.assert_called_once()
        assert connector._mailbox is None

    @patch("mailfold.email.connectors.imap.MailBox")
    def test_context_manager(self, mock_mailbox_class: MagicMock, config: IMAPConfig) -> None:
        mock_mailbox = MagicMock()
        mock_mailbox_class.return_value = mock_mailbox

        with IMAPConnector(config) as connector:
            assert connector._mailbox is not None

        mock_mailbox.logout.assert_called_once()

    @patch("mailfold.email.connectors.imap.MailBox")
    def test_disconnect_ignores_logout_error(
        self, mock_mailbox_class: MagicMock, config: IMAPConfig
    ) -> None:
        mock_mailbox_class.return_value.logout.side_effect = OSError("closed")

        connector = IMAPConnector(config)
        connector.connect()
        connector.disconnect()

        assert connector._mailbox is None

    def test_describe(self, config: IMAPConfig) -> None:
        assert IMAPConnector(config).describe() == "imap://user@imap.example.com:993"
