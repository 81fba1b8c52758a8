"""
Shared test fixtures.
"""

import os

import pytest

from profile_graph.models.config import AppSettings, CompletionSettings, ScraperSettings
from profile_graph.models.profile import ProfileInput

ENV_KEYS = [
    "OPENAI_API_KEY",
    "OPENAI_API_ENDPOINT",
    "OPENAI_MODEL",
    "BROWSERLESS_API_KEY",
    "LOG_LEVEL",
]


@pytest.fixture
def clean_env(monkeypatch):
    """Remove configuration variables, including any a .env load sets during the test."""
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    yield
    for key in ENV_KEYS:
        os.environ.pop(key, None)


@pytest.fixture
def pm_profile() -> ProfileInput:
    return ProfileInput(title="Senior Product Manager", company="Acme", location="NYC")


@pytest.fixture
def sales_profile() -> ProfileInput:
    return ProfileInput(title="Sales Director", company="Globex", location="Chicago")


@pytest.fixture
def completion_settings() -> CompletionSettings:
    """Completion settings with a usable (fake) API key."""
    return CompletionSettings(
        api_key="sk-test-key",
        api_endpoint="https://llm.test/v1/chat/completions",
    )


@pytest.fixture
def keyless_settings() -> CompletionSettings:
    return CompletionSettings(api_key=None)


@pytest.fixture
def app_settings(completion_settings) -> AppSettings:
    return AppSettings(completion=completion_settings, scraper=ScraperSettings())
