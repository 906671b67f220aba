"""First-run wizard creating a configuration document with one default account.

The wizard is a linear state machine::

    ANNOUNCE -> CONFIRM -> CONFIGURE -> PERSIST -> CREATED
                   |
                   +-> DECLINED

``BootstrapWizard.step`` advances a single state, which lets callers (and
tests) drive and inspect each transition. ``BootstrapWizard.run`` steps until
a terminal state is reached and returns its outcome.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from mailfold.accounts.config import (
    AccountConfig,
    IMAPBackendConfig,
    MaildirBackendConfig,
    SendmailBackendConfig,
    SMTPBackendConfig,
)
from mailfold.accounts.credentials.base import CredentialBackend
from mailfold.accounts.secrets import KeyringSecret, RawSecret, Secret, derive_secret_key
from mailfold.config import (
    MailfoldConfig,
    default_config_path,
    find_config_file,
    load_config,
    write_config,
)
from mailfold.prompt import Prompt

logger = logging.getLogger(__name__)


class WizardState(str, Enum):
    """States of the bootstrap wizard."""

    ANNOUNCE = "announce"
    CONFIRM = "confirm"
    CONFIGURE = "configure"
    PERSIST = "persist"
    DECLINED = "declined"
    CREATED = "created"


TERMINAL_STATES = frozenset({WizardState.DECLINED, WizardState.CREATED})


@dataclass(frozen=True)
class Declined:
    """The operator chose not to run the wizard. No file was written."""


@dataclass(frozen=True)
class Created:
    """A new configuration document was written."""

    path: Path
    config: MailfoldConfig


WizardOutcome = Declined | Created


def _ask_password(
    prompt: Prompt, store: CredentialBackend, account: str, backend_kind: str
) -> Secret:
    """Ask for a backend password and store it, returning the document reference.

    An empty answer disables authentication for the backend. Stores that do not
    keep secrets get a warning naming the entry to set.
    """
    value = prompt.secret(f"{backend_kind.upper()} password (leave empty for none)")
    if not value:
        return RawSecret(raw="")
    key = derive_secret_key(account, backend_kind)
    store.set_secret(key, value)
    if not store.persistent:
        prompt.warn(
            f"The {store.kind} secret store does not keep secrets between runs. "
            f"Set {store.location(key)} before running mailfold again."
        )
    return KeyringSecret(keyring=key)


def _domain_of(email: str) -> str:
    return email.rpartition("@")[2]


def configure_account(prompt: Prompt, store: CredentialBackend) -> tuple[str, AccountConfig]:
    """Interactively gather the settings of a single account.

    Passwords are written to the secret store; the returned account only
    references them by key.
    """
    name = prompt.text("Account name", "personal")
    email = prompt.text("Email address")
    display_name = prompt.text("Display name", email)
    domain = _domain_of(email)

    backend: IMAPBackendConfig | MaildirBackendConfig
    kind = prompt.choice("Receiving backend", ["imap", "maildir"], "imap")
    if kind == "imap":
        imap_ssl = prompt.confirm("Use SSL/TLS for IMAP?", True)
        backend = IMAPBackendConfig(
            host=prompt.text("IMAP host", f"imap.{domain}"),
            port=prompt.integer("IMAP port", 993 if imap_ssl else 143),
            login=prompt.text("IMAP login", email),
            ssl=imap_ssl,
            password=_ask_password(prompt, store, name, "imap"),
        )
    else:
        root_dir = prompt.path("Maildir root directory", Path("~/Mail"))
        backend = MaildirBackendConfig(root_dir=root_dir)

    sending_backend: SMTPBackendConfig | SendmailBackendConfig
    kind = prompt.choice("Sending backend", ["smtp", "sendmail"], "smtp")
    if kind == "smtp":
        smtp_ssl = prompt.confirm("Use SSL instead of STARTTLS for SMTP?", False)
        sending_backend = SMTPBackendConfig(
            host=prompt.text("SMTP host", f"smtp.{domain}"),
            port=prompt.integer("SMTP port", 465 if smtp_ssl else 587),
            login=prompt.text("SMTP login", email),
            ssl=smtp_ssl,
            password=_ask_password(prompt, store, name, "smtp"),
        )
    else:
        cmd = prompt.text("Sendmail command", "/usr/sbin/sendmail")
        sending_backend = SendmailBackendConfig(cmd=cmd)

    account = AccountConfig(
        email=email,
        display_name=display_name,
        backend=backend,
        sending_backend=sending_backend,
    )
    return name, account


class BootstrapWizard:
    """Interactive creation of the first configuration document."""

    def __init__(self, prompt: Prompt, store: CredentialBackend, path: Path) -> None:
        """Initialize the wizard.

        Args:
            prompt: Source of operator answers.
            store: Secret store receiving the passwords typed in.
            path: Expected configuration path, found missing by the caller.
        """
        self._prompt = prompt
        self._store = store
        self._path = path
        self.state = WizardState.ANNOUNCE
        self.account: tuple[str, AccountConfig] | None = None
        self.outcome: WizardOutcome | None = None

    def step(self) -> WizardState:
        """Run the current state and move to the next one.

        Raises:
            PromptCancelledError: If the operator aborts a prompt.
            PersistenceError: If the document cannot be written.
            RuntimeError: If the wizard already reached a terminal state.
        """
        if self.state is WizardState.ANNOUNCE:
            self._prompt.warn(f"Cannot find configuration at {self._path}.")
            self.state = WizardState.CONFIRM

        elif self.state is WizardState.CONFIRM:
            if self._prompt.confirm("Would you like to create one with the wizard?", True):
                self.state = WizardState.CONFIGURE
            else:
                logger.info("Configuration wizard declined")
                self.outcome = Declined()
                self.state = WizardState.DECLINED

        elif self.state is WizardState.CONFIGURE:
            self._prompt.section("Configuring your default account")
            name, account = configure_account(self._prompt, self._store)
            account.default = True
            self.account = (name, account)
            self.state = WizardState.PERSIST

        elif self.state is WizardState.PERSIST:
            assert self.account is not None
            name, account = self.account
            config = MailfoldConfig(accounts={name: account})
            path = self._prompt.path("Where to save the configuration?", self._path)
            self._prompt.info(f"Writing the configuration to {path}…")
            write_config(config, path)
            self._prompt.info("Done! Exiting the wizard…")
            self.outcome = Created(path=path, config=config)
            self.state = WizardState.CREATED

        else:
            raise RuntimeError(f"Wizard already finished ({self.state.value})")

        return self.state

    def run(self) -> WizardOutcome:
        """Step through the wizard until it declines or creates a document."""
        while self.state not in TERMINAL_STATES:
            self.step()
        assert self.outcome is not None
        return self.outcome


def load_or_bootstrap(
    explicit: Path | None, prompt: Prompt, store: CredentialBackend
) -> MailfoldConfig | None:
    """Load the configuration document, running the wizard when none exists.

    Args:
        explicit: Configuration path given by the operator, if any.
        prompt: Source of operator answers for the wizard.
        store: Secret store receiving passwords typed in the wizard.

    Returns:
        The configuration, or None if the operator declined the wizard.

    Raises:
        ConfigError: If an existing document is invalid.
        PersistenceError: If the wizard cannot write the new document.
        PromptCancelledError: If the operator aborts a wizard prompt.
    """
    path = find_config_file(explicit)
    if path is not None:
        return load_config(path)

    outcome = BootstrapWizard(prompt, store, default_config_path(explicit)).run()
    if isinstance(outcome, Declined):
        return None
    return outcome.config
