"""Configuration document and runtime settings for mailfold.

The configuration document holds the account table::

    accounts:
      work:
        default: true
        email: me@work.example
        backend:
          type: imap
          host: imap.work.example
          login: me@work.example
          password:
            keyring: work-imap-password
        sending_backend:
          type: smtp
          host: smtp.work.example
          login: me@work.example

Documents ending in ``.toml`` are read and written as TOML, any other file
as YAML. Runtime settings (which secret store to use, where to look for the
document) come from ``MAILFOLD_`` environment variables.
"""

import logging
import os
import tempfile
import tomllib
from pathlib import Path
from typing import Any, Literal

import tomli_w
import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict, SettingsError

from mailfold.accounts.config import BACKEND_KINDS, AccountConfig
from mailfold.exceptions import ConfigError, PersistenceError

logger = logging.getLogger(__name__)

PROJECT_NAME = "mailfold"
CWD_CONFIG_NAME = "mailfold.yaml"


class MailfoldConfig(BaseModel):
    """The configuration document: a table of named accounts.

    At most one account is expected to set ``default: true``. This is not
    validated here; account resolution picks the first default it finds.
    """

    model_config = ConfigDict(extra="forbid")

    accounts: dict[str, AccountConfig] = Field(default_factory=dict)

    @field_validator("accounts")
    @classmethod
    def _validate_names(cls, v: dict[str, AccountConfig]) -> dict[str, AccountConfig]:
        for name in v:
            if not name.strip():
                raise ValueError("account names must not be empty")
        return v


class Settings(BaseSettings):
    """Runtime settings loaded from environment variables with MAILFOLD_ prefix.

    Attributes:
        config_file: Configuration path (MAILFOLD_CONFIG_FILE).
        secret_backend: Secret store kind (MAILFOLD_SECRET_BACKEND).
        keyring_service: Keyring service name (MAILFOLD_KEYRING_SERVICE).
        enabled_backends: Backend kinds whose secrets are resolved, as a
            JSON list (MAILFOLD_ENABLED_BACKENDS).
        log_level: Logging level (MAILFOLD_LOG_LEVEL).
    """

    model_config = SettingsConfigDict(env_prefix="MAILFOLD_")

    config_file: Path | None = None
    secret_backend: Literal["keyring", "env"] = "keyring"
    keyring_service: str = Field(default=PROJECT_NAME, min_length=1)
    enabled_backends: set[str] = Field(default_factory=lambda: set(BACKEND_KINDS))
    log_level: str = "WARNING"

    @field_validator("enabled_backends")
    @classmethod
    def _validate_enabled_backends(cls, v: set[str]) -> set[str]:
        unknown = v - BACKEND_KINDS
        if unknown:
            raise ValueError(f"unknown backend kinds: {', '.join(sorted(unknown))}")
        return v


def user_config_path() -> Path:
    """Return the per-user configuration path.

    Uses $XDG_CONFIG_HOME/mailfold/config.yaml, with XDG_CONFIG_HOME
    defaulting to ~/.config.
    """
    xdg_config = os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
    return Path(xdg_config) / PROJECT_NAME / "config.yaml"


def config_search_paths() -> list[Path]:
    """List candidate configuration paths in lookup order.

    1. ./mailfold.yaml (current directory)
    2. The per-user configuration path
    """
    return [Path.cwd() / CWD_CONFIG_NAME, user_config_path()]


def find_config_file(explicit: Path | None = None) -> Path | None:
    """Return the first existing configuration file, or None.

    An explicit path is the only candidate when given.
    """
    if explicit is not None:
        explicit = explicit.expanduser()
        return explicit if explicit.is_file() else None
    for path in config_search_paths():
        if path.is_file():
            return path
    return None


def default_config_path(explicit: Path | None = None) -> Path:
    """Return the path where a new configuration should be created."""
    if explicit is not None:
        return explicit.expanduser()
    return user_config_path()


def _is_toml(path: Path) -> bool:
    return path.suffix.lower() == ".toml"


def _read_document(path: Path) -> dict[str, Any]:
    """Read a YAML or TOML document with improved error messages."""
    try:
        if _is_toml(path):
            with open(path, "rb") as f:
                return tomllib.load(f)
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML syntax: {e}", file_path=str(path)) from e
    except yaml.YAMLError as e:
        # Parse YAML error location if available
        mark = getattr(e, "problem_mark", None)
        error_msg = getattr(e, "problem", None) or str(e)
        raise ConfigError(
            f"Invalid YAML syntax: {error_msg}",
            file_path=str(path),
            line=mark.line + 1 if mark else None,
            col=mark.column + 1 if mark else None,
        ) from e
    except PermissionError as e:
        raise ConfigError(
            "Cannot read config file: permission denied", file_path=str(path)
        ) from e
    except OSError as e:
        raise ConfigError(f"Cannot read config file: {e}", file_path=str(path)) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError("Top-level value must be a mapping", file_path=str(path))
    return data


def _parse_validation_error(error: ValidationError) -> str:
    """Convert Pydantic ValidationError to user-friendly message."""
    errors = error.errors()
    if not errors:
        return "Unknown validation error"

    err = errors[0]
    loc = tuple(str(part) for part in err.get("loc", ()))
    msg = err.get("msg", "")
    error_type = err.get("type", "")
    field_name = ".".join(loc)

    if error_type == "extra_forbidden" and loc:
        return f"Unknown field '{field_name}'"

    if error_type == "missing" and loc:
        if len(loc) >= 3 and loc[0] == "accounts":
            return f"Account '{loc[1]}' is missing required field '{'.'.join(loc[2:])}'"
        return f"Missing required field '{field_name}'"

    if error_type == "union_tag_invalid" and loc:
        return f"Invalid backend type for '{field_name}': {msg}"

    if loc:
        return f"Invalid value for '{field_name}': {msg}"

    return str(error)


def load_settings() -> Settings:
    """Load runtime settings from the environment.

    Raises:
        ConfigError: If a MAILFOLD_ variable holds an invalid value.
    """
    try:
        return Settings()
    except ValidationError as e:
        raise ConfigError(f"Invalid environment settings: {_parse_validation_error(e)}") from e
    except SettingsError as e:
        raise ConfigError(f"Invalid environment settings: {e}") from e


def load_config(path: Path) -> MailfoldConfig:
    """Load and validate a configuration document.

    Raises:
        ConfigError: If the file cannot be read, parsed or validated.
    """
    data = _read_document(path)
    try:
        config = MailfoldConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(_parse_validation_error(e), file_path=str(path)) from e
    logger.debug("Loaded configuration (path=%s, accounts=%d)", path, len(config.accounts))
    return config


def serialize_config(config: MailfoldConfig, path: Path) -> str:
    """Render a configuration document in the format matching the path suffix."""
    data = config.model_dump(mode="json", exclude_none=True)
    if _is_toml(path):
        return tomli_w.dumps(data)
    return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)


def write_config(config: MailfoldConfig, path: Path) -> None:
    """Atomically write a new configuration document.

    Missing parent directories are created. The document is first written to
    a temporary file in the target directory then hard-linked into place. The
    link fails if the target exists, so an existing document is never
    replaced, and a failed write never leaves a partial document behind.

    Raises:
        PersistenceError: If the file already exists or cannot be written.
    """
    content = serialize_config(config, path)
    if path.exists():
        raise PersistenceError(path, "file already exists")

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise PersistenceError(path, f"cannot create directory {path.parent}: {e}") from e

    tmp_name: str | None = None
    try:
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=path.parent,
            prefix=f".{path.name}.",
            delete=False,
        ) as handle:
            tmp_name = handle.name
            handle.write(content)
        os.chmod(tmp_name, 0o600)
        os.link(tmp_name, path)
    except FileExistsError as e:
        raise PersistenceError(path, "file already exists") from e
    except OSError as e:
        raise PersistenceError(path, str(e)) from e
    finally:
        if tmp_name is not None:
            Path(tmp_name).unlink(missing_ok=True)

    logger.info("Configuration written (path=%s)", path)
