"""SMTP connector using smtplib."""

import logging
import smtplib

from mailfold.email.connectors.base import BaseConnector
from mailfold.email.connectors.config import SMTPConfig

logger = logging.getLogger(__name__)


class SMTPConnector(BaseConnector):
    """Connector opening an authenticated SMTP session."""

    kind = "smtp"

    def __init__(self, config: SMTPConfig) -> None:
        """Initialize SMTP connector.

        Args:
            config: SMTP server configuration.
        """
        self.config = config
        self._connection: smtplib.SMTP | smtplib.SMTP_SSL | None = None

    def connect(self) -> None:
        """Establish connection to SMTP server."""
        logger.debug(
            "Connecting to SMTP server (host=%s, port=%s, ssl=%s)",
            self.config.host,
            self.config.port,
            self.config.ssl,
        )
        connection: smtplib.SMTP
        if self.config.ssl:
            connection = smtplib.SMTP_SSL(self.config.host, self.config.port)
        else:
            connection = smtplib.SMTP(self.config.host, self.config.port)

        try:
            if not self.config.ssl:
                connection.starttls()
            if self.config.password is not None:
                connection.login(
                    self.config.username,
                    self.config.password.get_secret_value(),
                )
        except Exception:
            connection.close()
            raise
        self._connection = connection
        logger.info("SMTP connection established (host=%s)", self.config.host)

    def disconnect(self) -> None:
        """Close connection to SMTP server."""
        if self._connection:
            self._connection.quit()
            self._connection = None
            logger.info("SMTP connection closed")

    def describe(self) -> str:
        return f"smtp://{self.config.username}@{self.config.host}:{self.config.port}"
