"""Tests for the mailfold command line."""

import os
from collections.abc import Iterator
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from mailfold.cli import main
from mailfold.exceptions import PromptCancelledError

CONFIG = """\
accounts:
  work:
    default: true
    email: me@work.example
    backend:
      type: maildir
      root_dir: {root}
    sending_backend:
      type: sendmail
  personal:
    email: me@home.example
"""


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    root = tmp_path / "Mail"
    for sub in ("cur", "new", "tmp"):
        (root / sub).mkdir(parents=True)
    path = tmp_path / "config.yaml"
    path.write_text(CONFIG.format(root=root))
    return path


@pytest.fixture(autouse=True)
def clean_env() -> Iterator[None]:
    with patch.dict(os.environ, {"MAILFOLD_SECRET_BACKEND": "env"}, clear=True):
        yield


def _prompt(*confirms: bool) -> MagicMock:
    prompt = MagicMock()
    prompt.confirm.side_effect = list(confirms)
    return prompt


class TestMain:
    def test_no_command_prints_help(self) -> None:
        """Test running without a command exits with 1."""
        assert main([]) == 1

    def test_list(self, config_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Test accounts are listed with the default marked."""
        assert main(["-c", str(config_file), "account", "list"]) == 0

        lines = capsys.readouterr().out.splitlines()
        assert lines[0].startswith("* work")
        assert "maildir+sendmail" in lines[0]
        assert lines[1].startswith("  personal")

    def test_unknown_account(
        self, config_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test an unknown account exits with 1 and names the account."""
        assert main(["-c", str(config_file), "account", "check-up", "nope"]) == 1

        assert "Account not found: nope" in capsys.readouterr().err

    def test_no_default_account(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test asking for the default account without one exits with 1."""
        path = tmp_path / "config.yaml"
        path.write_text("accounts:\n  work: {}\n")

        assert main(["-c", str(path), "account", "check-up"]) == 1

        assert "No default account found" in capsys.readouterr().err

    def test_check_up_default_account(
        self, config_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test check-up opens the local backends of the default account."""
        with patch("mailfold.email.connectors.local.shutil.which", return_value="/bin/sendmail"):
            assert main(["-c", str(config_file), "account", "check-up", "default"]) == 0

        out = capsys.readouterr().out
        assert "Checking account work" in out
        assert "maildir://" in out
        assert "Done." in out

    def test_invalid_config(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Test an invalid document exits with 1."""
        path = tmp_path / "config.yaml"
        path.write_text("accounts:\n  work:\n    colour: red\n")

        assert main(["-c", str(path), "account", "list"]) == 1

        assert "Unknown field 'accounts.work.colour'" in capsys.readouterr().err

    @pytest.mark.parametrize(
        ("variable", "value"),
        [
            ("MAILFOLD_SECRET_BACKEND", "vault"),
            ("MAILFOLD_ENABLED_BACKENDS", '["pop3"]'),
            ("MAILFOLD_ENABLED_BACKENDS", "imap"),
        ],
    )
    def test_invalid_settings(
        self,
        config_file: Path,
        capsys: pytest.CaptureFixture[str],
        variable: str,
        value: str,
    ) -> None:
        """Test invalid MAILFOLD_ variables exit with 1 and a readable message."""
        with patch.dict(os.environ, {variable: value}):
            assert main(["-c", str(config_file), "account", "list"]) == 1

        err = capsys.readouterr().err
        assert err.startswith("Error: Invalid environment settings")
        assert "Traceback" not in err

    def test_declined_wizard(self, tmp_path: Path) -> None:
        """Test declining the wizard exits with 0 and writes nothing."""
        path = tmp_path / "missing" / "config.yaml"
        prompt = _prompt(False)

        assert main(["-c", str(path), "account", "list"], prompt=prompt) == 0

        assert not path.parent.exists()
        prompt.warn.assert_called_once_with(f"Cannot find configuration at {path}.")

    def test_cancelled_wizard(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Test aborting a wizard prompt exits with 0."""
        prompt = MagicMock()
        prompt.confirm.side_effect = PromptCancelledError()

        assert main(["-c", str(tmp_path / "c.yaml"), "account", "list"], prompt=prompt) == 0

        assert "Wizard cancelled." in capsys.readouterr().err
