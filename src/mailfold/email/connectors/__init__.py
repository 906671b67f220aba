"""Backend connectors for mailfold."""

from mailfold.email.connectors.base import BaseConnector
from mailfold.email.connectors.config import (
    IMAPConfig,
    SMTPConfig,
    build_imap_config,
    build_smtp_config,
)
from mailfold.email.connectors.imap import IMAPConnector
from mailfold.email.connectors.local import MaildirConnector, SendmailConnector
from mailfold.email.connectors.smtp import SMTPConnector

__all__ = [
    "BaseConnector",
    "IMAPConfig",
    "IMAPConnector",
    "MaildirConnector",
    "SMTPConfig",
    "SMTPConnector",
    "SendmailConnector",
    "build_imap_config",
    "build_smtp_config",
]
