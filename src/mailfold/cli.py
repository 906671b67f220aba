"""CLI entry point for mailfold."""

import argparse
import logging
import sys
from pathlib import Path

import structlog

from mailfold._error_handler import handle_cli_errors
from mailfold.accounts.credentials.factory import create_credential_backend
from mailfold.accounts.materializer import SecretMaterializer
from mailfold.accounts.service import AccountService
from mailfold.config import load_settings
from mailfold.prompt import Prompt, TerminalPrompt
from mailfold.wizard import load_or_bootstrap

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mailfold",
        description="Mailfold - multi-account mail configuration",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        help="Path to the configuration file (default: auto-detect)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # account subcommand
    account_parser = subparsers.add_parser("account", help="Manage accounts")
    account_sub = account_parser.add_subparsers(dest="action", help="Account actions")
    account_sub.add_parser("list", help="List configured accounts")
    checkup_parser = account_sub.add_parser(
        "check-up",
        help="Resolve an account and check its backends can be reached",
    )
    checkup_parser.add_argument(
        "account",
        nargs="?",
        default=None,
        help="Account name (default: the default account)",
    )

    return parser


def _configure_logging(level: str) -> None:
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        numeric = logging.WARNING
    logging.basicConfig(
        level=numeric,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(numeric),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


def main(argv: list[str] | None = None, prompt: Prompt | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None or getattr(args, "action", None) is None:
        parser.print_help()
        return 1

    return _run(args, prompt or TerminalPrompt())


@handle_cli_errors
def _run(args: argparse.Namespace, prompt: Prompt) -> int:
    settings = load_settings()
    _configure_logging("DEBUG" if args.verbose else settings.log_level)

    store = create_credential_backend(settings.secret_backend, settings.keyring_service)
    config = load_or_bootstrap(args.config or settings.config_file, prompt, store)
    if config is None:
        return 0

    materializer = SecretMaterializer(store, settings.enabled_backends)
    service = AccountService(config.accounts, materializer)

    if args.action == "list":
        return _handle_list(service)
    if args.action == "check-up":
        return _handle_checkup(service, args.account)
    return 1


def _handle_list(service: AccountService) -> int:
    """Print accounts, marking the default one."""
    names = service.list_accounts()
    if not names:
        print("No accounts configured")
        return 0

    default = service.get_default()
    for name in names:
        account = service.get_config(name)
        marker = "*" if name == default else " "
        backends = "+".join(
            b.type for b in (account.backend, account.sending_backend) if b is not None
        )
        print(f"{marker} {name:<20} {backends or '-':<16} {account.email or ''}".rstrip())
    return 0


def _handle_checkup(service: AccountService, account: str | None) -> int:
    """Resolve an account, materialize its secrets and open every backend."""
    name, _ = service.resolve(account)
    print(f"Checking account {name}…")
    for connector in service.create_connectors(name):
        with connector:
            print(f"✓ {connector.describe()}")
    print("Done.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
