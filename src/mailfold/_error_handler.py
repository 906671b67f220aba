"""Common error handling for CLI commands."""

import logging
import smtplib
import sys
from collections.abc import Callable
from functools import wraps
from typing import Any

from imap_tools import ImapToolsError

from mailfold.exceptions import (
    AccountNotFoundError,
    ConfigError,
    NoDefaultAccountError,
    PersistenceError,
    PromptCancelledError,
    SecretResolutionError,
)

logger = logging.getLogger(__name__)


def _fail(message: str) -> int:
    print(f"Error: {message}", file=sys.stderr)
    return 1


def handle_cli_errors(func: Callable[..., int]) -> Callable[..., int]:
    """Wrap a CLI command to turn errors into messages and exit codes."""

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> int:
        try:
            return func(*args, **kwargs)
        except PromptCancelledError:
            print("Wizard cancelled.", file=sys.stderr)
            return 0
        except NoDefaultAccountError as e:
            return _fail(str(e))
        except AccountNotFoundError as e:
            return _fail(f"Account not found: {e.account}")
        except SecretResolutionError as e:
            cause = f" ({e.__cause__})" if e.__cause__ else ""
            return _fail(f"{e}{cause}")
        except ConfigError as e:
            return _fail(str(e))
        except PersistenceError as e:
            return _fail(str(e))
        except ImapToolsError as e:
            return _fail(f"Email server error: {e}")
        except smtplib.SMTPAuthenticationError:
            return _fail("Email server authentication failed. Check your credentials.")
        except smtplib.SMTPException as e:
            return _fail(f"SMTP error: {e}")
        except TimeoutError:
            return _fail("Connection timed out. The email server did not respond.")
        except ConnectionError as e:
            return _fail(f"Could not connect to email server: {e}")
        except OSError as e:
            return _fail(str(e))
        except Exception:
            logger.exception("Unexpected error in command %s", func.__name__)
            return _fail("An unexpected error occurred. Run with --verbose for details.")

    return wrapper
