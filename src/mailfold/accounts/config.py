"""Account configuration models with discriminated unions per backend slot."""

from pathlib import Path
from typing import Annotated, ClassVar, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from mailfold.accounts.secrets import KeyringSecret, Secret, coerce_secret


class _BackendModel(BaseModel):
    model_config = ConfigDict(extra="forbid")

    # Whether the backend owns a password Secret Reference
    needs_credentials: ClassVar[bool] = False


class IMAPBackendConfig(_BackendModel):
    """IMAP receiving backend.

    Attributes:
        type: Backend type, always "imap" for this class.
        host: IMAP server hostname.
        port: IMAP server port (default: 993 for IMAP SSL).
        login: Username used to authenticate.
        ssl: Whether to use SSL/TLS (default: True).
        password: Inline secret or keyring reference (default: derived keyring key).
    """

    needs_credentials: ClassVar[bool] = True

    type: Literal["imap"] = "imap"
    host: str = Field(..., min_length=1, description="IMAP server hostname")
    port: int = Field(default=993, ge=1, le=65535, description="IMAP server port")
    login: str = Field(..., min_length=1, description="Account login")
    ssl: bool = Field(default=True, description="Use SSL/TLS connection")
    password: Secret = Field(
        default_factory=KeyringSecret,
        description="Password as inline value or keyring reference",
    )

    @field_validator("password", mode="before")
    @classmethod
    def _coerce_password(cls, v: object) -> object:
        return coerce_secret(v)


class MaildirBackendConfig(_BackendModel):
    """Local Maildir receiving backend."""

    type: Literal["maildir"] = "maildir"
    root_dir: Path = Field(..., description="Maildir root directory")


class SMTPBackendConfig(_BackendModel):
    """SMTP sending backend.

    Attributes:
        type: Backend type, always "smtp" for this class.
        host: SMTP server hostname.
        port: SMTP server port (default: 587 for STARTTLS).
        login: Username used to authenticate.
        ssl: Use SSL instead of STARTTLS (default: False).
        password: Inline secret or keyring reference (default: derived keyring key).
    """

    needs_credentials: ClassVar[bool] = True

    type: Literal["smtp"] = "smtp"
    host: str = Field(..., min_length=1, description="SMTP server hostname")
    port: int = Field(default=587, ge=1, le=65535, description="SMTP server port")
    login: str = Field(..., min_length=1, description="Account login")
    ssl: bool = Field(default=False, description="Use SSL instead of STARTTLS")
    password: Secret = Field(
        default_factory=KeyringSecret,
        description="Password as inline value or keyring reference",
    )

    @field_validator("password", mode="before")
    @classmethod
    def _coerce_password(cls, v: object) -> object:
        return coerce_secret(v)


class SendmailBackendConfig(_BackendModel):
    """Sendmail-compatible command used as sending backend."""

    type: Literal["sendmail"] = "sendmail"
    cmd: str = Field(default="/usr/sbin/sendmail", min_length=1)


ReceivingBackendConfig = Annotated[
    IMAPBackendConfig | MaildirBackendConfig, Field(discriminator="type")
]
SendingBackendConfig = Annotated[
    SMTPBackendConfig | SendmailBackendConfig, Field(discriminator="type")
]

BACKEND_KINDS: frozenset[str] = frozenset({"imap", "maildir", "smtp", "sendmail"})


class AccountConfig(BaseModel):
    """Configuration of a single named account.

    The account name is the key under which the record is stored in the
    ``accounts`` table, so it is not repeated here.

    Attributes:
        default: Whether this account is used when no name is given.
        email: Address of the account.
        display_name: Name shown alongside the address.
        backend: Backend used to receive messages.
        sending_backend: Backend used to send messages.
    """

    model_config = ConfigDict(extra="forbid")

    default: bool | None = None
    email: str | None = Field(default=None, min_length=1)
    display_name: str | None = None
    backend: ReceivingBackendConfig | None = None
    sending_backend: SendingBackendConfig | None = None

    def is_default(self) -> bool:
        return self.default is True
