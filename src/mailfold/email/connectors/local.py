"""Connectors for local backends (Maildir directories and sendmail commands)."""

import logging
import shlex
import shutil
from pathlib import Path

from mailfold.email.connectors.base import BaseConnector

logger = logging.getLogger(__name__)

_MAILDIR_SUBDIRS = ("cur", "new", "tmp")


class MaildirConnector(BaseConnector):
    """Connector checking that a Maildir root is usable."""

    kind = "maildir"

    def __init__(self, root_dir: Path) -> None:
        self.root_dir = root_dir.expanduser()

    def connect(self) -> None:
        """Verify the Maildir layout.

        Raises:
            FileNotFoundError: If the root or one of its subfolders is missing.
        """
        for sub in _MAILDIR_SUBDIRS:
            path = self.root_dir / sub
            if not path.is_dir():
                raise FileNotFoundError(f"Maildir folder missing: {path}")
        logger.info("Maildir opened (root=%s)", self.root_dir)

    def disconnect(self) -> None:
        pass

    def describe(self) -> str:
        return f"maildir://{self.root_dir}"


class SendmailConnector(BaseConnector):
    """Connector checking that a sendmail-compatible command exists."""

    kind = "sendmail"

    def __init__(self, cmd: str) -> None:
        self.cmd = cmd

    def connect(self) -> None:
        """Verify the command can be found.

        Raises:
            FileNotFoundError: If the executable is not on PATH.
        """
        program = shlex.split(self.cmd)[0]
        if shutil.which(program) is None:
            raise FileNotFoundError(f"Sendmail command not found: {program}")

    def disconnect(self) -> None:
        pass

    def describe(self) -> str:
        return f"sendmail: {self.cmd}"
