"""Tests for the management CLI argument handling."""

from pathlib import Path
from unittest.mock import patch

import pytest

import cli


@pytest.mark.unit
class TestCli:
    def test_no_command_prints_help(self, monkeypatch: pytest.MonkeyPatch, capsys):
        monkeypatch.setattr("sys.argv", ["cli"])

        assert cli.main() == 1
        assert "migrate" in capsys.readouterr().out

    def test_migrate_defaults_to_head(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setattr("sys.argv", ["cli", "migrate"])

        with patch("alembic.command.upgrade") as upgrade:
            assert cli.main() == 0

        config, target = upgrade.call_args.args
        assert target == "head"
        assert Path(config.get_main_option("script_location")).name == "alembic"

    def test_seed_runs_seed_coroutine(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setattr("sys.argv", ["cli", "seed"])

        with patch.object(cli, "asyncio") as asyncio_mock:
            assert cli.main() == 0

        asyncio_mock.run.assert_called_once()
        asyncio_mock.run.call_args.args[0].close()
