"""Configuration management."""

import os
from dataclasses import dataclass, field
from datetime import time
from pathlib import Path

import yaml

from release_watcher.core.exceptions import ConfigurationError

DEFAULT_QWEN_MODEL = "qwen-plus"


@dataclass
class QwenConfig:
    """Qwen (DashScope) API settings."""
    model: str = DEFAULT_QWEN_MODEL
    base_url: str = "https://dashscope.aliyuncs.com/compatible-mode/v1"
    max_tokens: int = 500
    temperature: float = 0.3
    max_retries: int = 3
    initial_retry_delay: float = 2.0
    request_delay: float = 0.5
    max_input_chars: int = 8000


@dataclass
class PathsConfig:
    """Path settings."""
    state_db: Path = Path("releases.db")
    reports_dir: Path = Path("reports")


@dataclass
class MonitoringConfig:
    """Polling settings."""
    page_size: int = 100
    max_concurrency: int = 4
    record_seen_on_summary_failure: bool = True
    schedule_time: str = "08:00"


@dataclass
class PromptsConfig:
    """Prompts for LLM."""
    language: str = "English"
    summary: dict = field(default_factory=lambda: {
        "system": "You are a release-notes editor for software engineers.",
        "user": (
            "Summarize the main changes of the following GitHub release of {repo} ({tag}) "
            "in concise {language}, as 3-5 bullet points:\n\n{content}"
        ),
    })


@dataclass
class Settings:
    """Application settings."""

    # API keys (from environment only)
    github_token: str = ""
    dashscope_api_key: str = ""

    qwen: QwenConfig = field(default_factory=QwenConfig)
    paths: PathsConfig = field(default_factory=PathsConfig)
    monitoring: MonitoringConfig = field(default_factory=MonitoringConfig)
    prompts: PromptsConfig = field(default_factory=PromptsConfig)

    @property
    def qwen_model(self) -> str:
        return self.qwen.model

    @property
    def state_db(self) -> Path:
        return self.paths.state_db

    @property
    def reports_dir(self) -> Path:
        return self.paths.reports_dir

    @property
    def schedule_time(self) -> time:
        return parse_schedule_time(self.monitoring.schedule_time)

    def validate(self) -> None:
        """Fail fast on missing credentials."""
        missing = []
        if not self.github_token:
            missing.append("GITHUB_TOKEN")
        if not self.dashscope_api_key:
            missing.append("DASHSCOPE_API_KEY")
        if missing:
            raise ConfigurationError(f"Missing required environment variable(s): {', '.join(missing)}")
        if self.monitoring.max_concurrency < 1:
            raise ConfigurationError("monitoring.max_concurrency must be at least 1")
        parse_schedule_time(self.monitoring.schedule_time)


def parse_schedule_time(value: str) -> time:
    """Parse a daily trigger time in HH:MM form."""
    try:
        hour, minute = value.split(":")
        return time(int(hour), int(minute))
    except (AttributeError, ValueError) as e:
        raise ConfigurationError(f"Invalid schedule_time {value!r}, expected HH:MM") from e


def load_config(config_path: Path = Path("config.yaml")) -> dict:
    """Load configuration from YAML file."""
    if not config_path.exists():
        return {}

    with open(config_path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def get_settings(config_path: Path = Path("config.yaml")) -> Settings:
    """Get application settings from YAML config and environment."""
    config = load_config(config_path)

    settings = Settings(
        github_token=os.getenv("GITHUB_TOKEN", ""),
        dashscope_api_key=os.getenv("DASHSCOPE_API_KEY", ""),
    )

    if "qwen" in config:
        for key, value in config["qwen"].items():
            setattr(settings.qwen, key, value)

    if "paths" in config:
        for key, value in config["paths"].items():
            setattr(settings.paths, key, Path(value))

    if "monitoring" in config:
        for key, value in config["monitoring"].items():
            setattr(settings.monitoring, key, value)

    if "prompts" in config:
        settings.prompts = PromptsConfig(**config["prompts"])

    # Environment wins over YAML for the model
    model = os.getenv("QWEN_MODEL")
    if model:
        settings.qwen.model = model

    return settings
