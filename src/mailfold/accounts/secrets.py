"""Secret references stored in account configuration.

A password field is either an inline literal or a deferred lookup into a
secret store. Keeping them as distinct types lets an explicitly empty
literal ("no authentication") coexist with an omitted field ("look it up").
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class RawSecret(BaseModel):
    """Inline secret value.

    Attributes:
        raw: The literal value. An empty string disables authentication.
    """

    model_config = ConfigDict(extra="forbid")

    raw: str

    def is_empty(self) -> bool:
        return self.raw == ""


class KeyringSecret(BaseModel):
    """Secret deferred to an external store.

    Attributes:
        keyring: Store key holding the value, or None to derive it from the
            account name and backend kind.
    """

    model_config = ConfigDict(extra="forbid")

    keyring: str | None = Field(default=None, min_length=1)

    def key_for(self, account: str, backend_kind: str) -> str:
        """Return the store key for this reference."""
        return self.keyring or derive_secret_key(account, backend_kind)


Secret = RawSecret | KeyringSecret


def derive_secret_key(account: str, backend_kind: str) -> str:
    """Build the default store key for an account's backend password.

    For example, account "work" with an IMAP backend maps to
    "work-imap-password".
    """
    return f"{account}-{backend_kind}-password"


def coerce_secret(value: Any) -> Any:
    """Accept a bare string in documents as shorthand for an inline secret."""
    if isinstance(value, str):
        return {"raw": value}
    if value is None:
        return {}
    return value
