"""
Configuration Models

Pydantic models for completion endpoint, scraper and logging configuration.
Settings are frozen and injected into the generator and the text fetcher;
nothing below the CLI reads the process environment directly.
"""

import json
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from profile_graph.utils.credential_manager import (
    PLACEHOLDER_VALUES,
    CredentialManager,
)

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)


class CompletionSettings(BaseModel):
    """Chat-completion endpoint configuration."""

    model_config = ConfigDict(frozen=True)

    api_endpoint: str = Field(default="https://api.openai.com/v1/chat/completions")
    api_key: Optional[str] = Field(default=None, repr=False)
    model: str = Field(default="gpt-3.5-turbo")
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    max_tokens: int = Field(default=2048, gt=0)
    timeout: float = Field(default=30.0, gt=0)
    max_source_chars: int = Field(default=16000, gt=0)

    @property
    def has_valid_api_key(self) -> bool:
        """True unless the key is missing, empty or the example placeholder."""
        if not self.api_key:
            return False
        return self.api_key != PLACEHOLDER_VALUES["OPENAI_API_KEY"]


class ScraperSettings(BaseModel):
    """Headless browser configuration."""

    model_config = ConfigDict(frozen=True)

    timeout: float = Field(default=30.0, gt=0)
    viewport_width: int = Field(default=1280, gt=0)
    viewport_height: int = Field(default=800, gt=0)
    user_agent: str = Field(default=DEFAULT_USER_AGENT)
    browserless_api_key: Optional[str] = Field(default=None, repr=False)
    browserless_endpoint: str = Field(default="wss://chrome.browserless.io")
    preview_chars: int = Field(default=1000, gt=0)

    @property
    def use_browserless(self) -> bool:
        """True when a real Browserless key is configured."""
        if not self.browserless_api_key:
            return False
        return self.browserless_api_key != PLACEHOLDER_VALUES["BROWSERLESS_API_KEY"]


class AppSettings(BaseModel):
    """Application configuration model."""

    model_config = ConfigDict(frozen=True)

    completion: CompletionSettings = Field(default_factory=CompletionSettings)
    scraper: ScraperSettings = Field(default_factory=ScraperSettings)
    log_level: str = Field(default="INFO")
    log_file: str = Field(default="logs/profile-graph.log")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is valid."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {', '.join(valid_levels)}")
        return v.upper()

    @classmethod
    def load(cls, config_path: Path | str | None = None) -> "AppSettings":
        """Load settings from a JSON config file.

        Args:
            config_path: Path to settings.json (defaults to config/settings.json)

        Returns:
            AppSettings: Validated configuration

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config validation fails
        """
        if config_path is None:
            config_path = Path("config/settings.json")
        else:
            config_path = Path(config_path)

        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}. "
                f"Copy {config_path.stem}.example.json to {config_path.name}"
            )

        with open(config_path, "r", encoding="utf-8") as f:
            config_data = json.load(f)

        return cls(**config_data)

    @classmethod
    def from_env(cls, env_file: Path | str = ".env") -> "AppSettings":
        """Build settings from a .env file and the process environment.

        Recognized variables: OPENAI_API_KEY, OPENAI_API_ENDPOINT, OPENAI_MODEL,
        BROWSERLESS_API_KEY, LOG_LEVEL. Unset variables keep their defaults.
        """
        credentials = CredentialManager(env_file=Path(env_file))

        completion: dict[str, object] = {
            "api_key": credentials.get_credential("OPENAI_API_KEY"),
        }
        endpoint = credentials.get_setting("OPENAI_API_ENDPOINT")
        if endpoint:
            completion["api_endpoint"] = endpoint
        model = credentials.get_setting("OPENAI_MODEL")
        if model:
            completion["model"] = model

        return cls(
            completion=CompletionSettings(**completion),
            scraper=ScraperSettings(
                browserless_api_key=credentials.get_credential("BROWSERLESS_API_KEY"),
            ),
            log_level=credentials.get_setting("LOG_LEVEL") or "INFO",
        )
