"""IMAP connector using imap-tools."""

import logging

from imap_tools import MailBox, MailBoxUnencrypted

from mailfold.email.connectors.base import BaseConnector
from mailfold.email.connectors.config import IMAPConfig

logger = logging.getLogger(__name__)


class IMAPConnector(BaseConnector):
    """Connector opening an authenticated IMAP session."""

    kind = "imap"

    def __init__(self, config: IMAPConfig) -> None:
        """Initialize IMAP connector.

        Args:
            config: IMAP server configuration.
        """
        self.config = config
        self._mailbox: MailBox | MailBoxUnencrypted | None = None

    def connect(self) -> None:
        """Establish connection to IMAP server."""
        logger.debug(
            "Connecting to IMAP server (host=%s, port=%s, ssl=%s)",
            self.config.host,
            self.config.port,
            self.config.ssl,
        )
        if self.config.ssl:
            mailbox: MailBox | MailBoxUnencrypted = MailBox(self.config.host, self.config.port)
        else:
            mailbox = MailBoxUnencrypted(self.config.host, self.config.port)

        if self.config.password is not None:
            try:
                mailbox.login(
                    self.config.username,
                    self.config.password.get_secret_value(),
                )
            except Exception:
                mailbox.client.shutdown()
                raise
        self._mailbox = mailbox
        logger.info("IMAP connection established (host=%s)", self.config.host)

    def disconnect(self) -> None:
        """Close connection to IMAP server."""
        if self._mailbox:
            try:
                self._mailbox.logout()
            except Exception:
                logger.debug("IMAP logout failed (connection may already be closed)")
            self._mailbox = None

    def describe(self) -> str:
        return f"imap://{self.config.username}@{self.config.host}:{self.config.port}"
