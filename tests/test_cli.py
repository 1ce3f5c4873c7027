"""Tests for the CLI entry point."""

from pathlib import Path
from tempfile import TemporaryDirectory
from unittest.mock import patch

import typer
from typer.testing import CliRunner

from release_watcher.cli import main
from release_watcher.core import SQLiteStateStore

runner = CliRunner()


def make_app() -> typer.Typer:
    app = typer.Typer()
    app.command()(main)
    return app


def test_missing_credentials_exit_before_running() -> None:
    with patch.dict("os.environ", {}, clear=True), patch("release_watcher.cli.async_run") as async_run:
        result = runner.invoke(make_app(), ["--once", "--config", "does-not-exist.yaml"])

    assert result.exit_code == 1
    async_run.assert_not_called()


def test_show_state_lists_entries() -> None:
    with TemporaryDirectory() as tmpdir:
        db_path = Path(tmpdir) / "releases.db"
        store = SQLiteStateStore(db_path)
        store.upsert("org/a", "2024-01-01T00:00:00Z")
        store.close()

        config_path = Path(tmpdir) / "config.yaml"
        config_path.write_text(f"paths:\n  state_db: {db_path.as_posix()}\n", encoding="utf-8")

        with patch.dict("os.environ", {}, clear=True):
            result = runner.invoke(make_app(), ["--show-state", "--config", str(config_path)])

    assert result.exit_code == 0
    assert "2024-01-01T00:00:00Z  org/a" in result.output


def test_once_runs_single_cycle() -> None:
    env = {"GITHUB_TOKEN": "gh", "DASHSCOPE_API_KEY": "ds"}
    with patch.dict("os.environ", env, clear=True), patch("release_watcher.cli.async_run") as async_run:
        result = runner.invoke(make_app(), ["--once", "--config", "does-not-exist.yaml"])

    assert result.exit_code == 0
    settings, once = async_run.call_args.args
    assert once is True
    assert settings.github_token == "gh"
