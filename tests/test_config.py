"""Tests for configuration loading."""

from datetime import time
from pathlib import Path
from tempfile import TemporaryDirectory
from unittest.mock import patch

import pytest

from release_watcher.config import Settings, get_settings, parse_schedule_time
from release_watcher.core import ConfigurationError


def test_defaults_from_environment() -> None:
    env = {"GITHUB_TOKEN": "gh", "DASHSCOPE_API_KEY": "ds"}
    with patch.dict("os.environ", env, clear=True):
        settings = get_settings(Path("does-not-exist.yaml"))

    assert settings.github_token == "gh"
    assert settings.dashscope_api_key == "ds"
    assert settings.qwen_model == "qwen-plus"
    assert settings.state_db == Path("releases.db")
    assert settings.schedule_time == time(8, 0)
    settings.validate()


def test_model_override_from_environment() -> None:
    env = {"GITHUB_TOKEN": "gh", "DASHSCOPE_API_KEY": "ds", "QWEN_MODEL": "qwen-max"}
    with patch.dict("os.environ", env, clear=True):
        settings = get_settings(Path("does-not-exist.yaml"))

    assert settings.qwen_model == "qwen-max"


def test_yaml_config_applied() -> None:
    with TemporaryDirectory() as tmpdir:
        config_path = Path(tmpdir) / "config.yaml"
        config_path.write_text(
            "qwen:\n"
            "  model: qwen-turbo\n"
            "paths:\n"
            "  state_db: data/state.db\n"
            "  reports_dir: out\n"
            "monitoring:\n"
            "  max_concurrency: 8\n"
            '  schedule_time: "06:30"\n',
            encoding="utf-8",
        )
        with patch.dict("os.environ", {}, clear=True):
            settings = get_settings(config_path)

    assert settings.qwen_model == "qwen-turbo"
    assert settings.state_db == Path("data/state.db")
    assert settings.reports_dir == Path("out")
    assert settings.monitoring.max_concurrency == 8
    assert settings.schedule_time == time(6, 30)


@pytest.mark.parametrize(
    "github_token, api_key, missing",
    [
        ("", "ds", "GITHUB_TOKEN"),
        ("gh", "", "DASHSCOPE_API_KEY"),
    ],
)
def test_missing_credentials_fail_fast(github_token: str, api_key: str, missing: str) -> None:
    settings = Settings(github_token=github_token, dashscope_api_key=api_key)

    with pytest.raises(ConfigurationError, match=missing):
        settings.validate()


@pytest.mark.parametrize("value", ["8", "25:00", "noon", 480])
def test_invalid_schedule_time(value) -> None:
    with pytest.raises(ConfigurationError):
        parse_schedule_time(value)
