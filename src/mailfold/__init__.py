"""Account resolution, lazy secrets and first-run setup for multi-account mail tooling."""

from mailfold.accounts.config import AccountConfig
from mailfold.accounts.materializer import SecretMaterializer
from mailfold.accounts.secrets import KeyringSecret, RawSecret
from mailfold.accounts.service import AccountService
from mailfold.config import MailfoldConfig, Settings, load_config, write_config
from mailfold.wizard import BootstrapWizard, Created, Declined, load_or_bootstrap

__version__ = "0.1.0"

__all__ = [
    "AccountConfig",
    "AccountService",
    "BootstrapWizard",
    "Created",
    "Declined",
    "KeyringSecret",
    "MailfoldConfig",
    "RawSecret",
    "SecretMaterializer",
    "Settings",
    "load_config",
    "load_or_bootstrap",
    "write_config",
]
