"""Interactive prompts used by the bootstrap wizard."""

import getpass
from abc import ABC, abstractmethod
from collections.abc import Callable
from pathlib import Path

from mailfold.exceptions import PromptCancelledError


class Prompt(ABC):
    """Source of operator answers.

    Every method either returns a value or raises PromptCancelledError.
    """

    @abstractmethod
    def confirm(self, question: str, default: bool = True) -> bool: ...

    @abstractmethod
    def text(self, question: str, default: str | None = None) -> str: ...

    @abstractmethod
    def integer(self, question: str, default: int | None = None) -> int: ...

    @abstractmethod
    def secret(self, question: str) -> str: ...

    @abstractmethod
    def path(self, question: str, default: Path | None = None) -> Path: ...

    @abstractmethod
    def choice(self, question: str, choices: list[str], default: str) -> str: ...

    def warn(self, message: str) -> None:
        print(f"Warning: {message}")

    def section(self, title: str) -> None:
        print(f"\n{title}\n{'=' * len(title)}")

    def info(self, message: str) -> None:
        print(message)


def _ask(read: Callable[[str], str], question: str) -> str:
    try:
        return read(question)
    except (EOFError, KeyboardInterrupt):
        print()
        raise PromptCancelledError() from None


class TerminalPrompt(Prompt):
    """Prompt reading answers from the terminal."""

    def __init__(
        self,
        read: Callable[[str], str] = input,
        read_secret: Callable[[str], str] = getpass.getpass,
    ) -> None:
        self._read = read
        self._read_secret = read_secret

    def confirm(self, question: str, default: bool = True) -> bool:
        suffix = " [Y/n]: " if default else " [y/N]: "
        while True:
            raw = _ask(self._read, question + suffix).strip().lower()
            if not raw:
                return default
            if raw in {"y", "yes"}:
                return True
            if raw in {"n", "no"}:
                return False
            print("Please answer y or n.")

    def text(self, question: str, default: str | None = None) -> str:
        suffix = f" [{default}]: " if default else ": "
        while True:
            raw = _ask(self._read, question + suffix).strip()
            if raw:
                return raw
            if default is not None:
                return default
            print("A value is required.")

    def integer(self, question: str, default: int | None = None) -> int:
        while True:
            raw = self.text(question, None if default is None else str(default))
            try:
                return int(raw)
            except ValueError:
                print("Please enter a number.")

    def secret(self, question: str) -> str:
        return _ask(self._read_secret, f"{question}: ")

    def path(self, question: str, default: Path | None = None) -> Path:
        raw = self.text(question, None if default is None else str(default))
        return Path(raw).expanduser()

    def choice(self, question: str, choices: list[str], default: str) -> str:
        options = "/".join(choices)
        while True:
            raw = self.text(f"{question} ({options})", default)
            if raw in choices:
                return raw
            print(f"Please choose one of: {options}")
