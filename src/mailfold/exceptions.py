"""Custom exceptions for mailfold."""

from pathlib import Path


class MailfoldError(Exception):
    """Base exception for mailfold."""


class ConfigError(MailfoldError):
    """Raised when there is a configuration error."""

    def __init__(
        self,
        message: str,
        file_path: str | None = None,
        line: int | None = None,
        col: int | None = None,
    ) -> None:
        self.file_path = file_path
        self.line = line
        self.col = col
        full_message = message
        if file_path:
            location = f" in {file_path}"
            if line is not None:
                location += f" at line {line}"
                if col is not None:
                    location += f", column {col}"
            full_message = f"Configuration error{location}: {message}"
        super().__init__(full_message)


class NoDefaultAccountError(MailfoldError):
    """Raised when no account is marked as default."""

    def __init__(self) -> None:
        super().__init__(
            "No default account found. Set `default: true` on one account "
            "or pass an account name explicitly."
        )


class AccountNotFoundError(MailfoldError):
    """Raised when a requested account is not found."""

    def __init__(self, account: str) -> None:
        self.account = account
        super().__init__(f"Account not found: {account}")


class CredentialNotFoundError(ConfigError):
    """Raised when a secret store has no usable entry for a key."""

    def __init__(self, key: str, backend: str, reason: str | None = None) -> None:
        self.key = key
        self.backend = backend
        self.reason = reason
        message = f"Missing secret '{key}' in {backend} store"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class SecretResolutionError(ConfigError):
    """Raised when a deferred credential of an account cannot be materialized."""

    def __init__(self, account: str, field: str) -> None:
        self.account = account
        self.field = field
        super().__init__(f"Cannot resolve secret {field} of account '{account}'")


class UnresolvedSecretError(ConfigError):
    """Raised when a backend is built from a credential that was never materialized."""

    def __init__(self, account: str, field: str) -> None:
        self.account = account
        self.field = field
        super().__init__(
            f"Secret {field} of account '{account}' is still a keyring reference"
        )


class UnsupportedBackendError(ConfigError):
    """Raised when an unsupported backend type is requested."""

    def __init__(self, backend_type: str) -> None:
        self.backend_type = backend_type
        super().__init__(f"Unsupported backend type: {backend_type}")


class PersistenceError(MailfoldError):
    """Raised when the configuration document cannot be written."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot write configuration to {path}: {reason}")


class PromptCancelledError(MailfoldError):
    """Raised when the operator aborts an interactive prompt."""

    def __init__(self) -> None:
        super().__init__("Prompt cancelled by user")
