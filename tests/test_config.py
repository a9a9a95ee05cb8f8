"""
Tests for settings validation.
"""

import pytest

from snapjournal_ai.config import Settings, _env_int, _env_optional_float, get_settings
from snapjournal_ai.errors import ConfigError


def test_defaults_are_valid():
    config = Settings()
    assert config.process_max_tokens > 0
    assert get_settings() is get_settings()


@pytest.mark.parametrize(
    "overrides",
    [
        {"ai_backend": "openai"},
        {"process_max_tokens": 0},
        {"request_timeout": -1.0},
        {"log_level": "chatty"},
        {"discovery_command": "   "},
    ],
)
def test_invalid_settings_raise_config_error(overrides):
    with pytest.raises(ConfigError):
        Settings(**overrides)


def test_historical_backend_tag_is_valid():
    assert Settings(ai_backend="llama.cpp").ai_backend == "llama.cpp"


def test_discovery_command_is_split_like_a_shell():
    config = Settings(discovery_command='ollama list --format "plain text"')
    assert config.discovery_argv == ["ollama", "list", "--format", "plain text"]


@pytest.mark.parametrize(
    "name, reader",
    [
        ("PROCESS_BACKEND_MAX_TOKENS", lambda: _env_int("PROCESS_BACKEND_MAX_TOKENS", "256")),
        ("API_PORT", lambda: _env_int("API_PORT", "8000")),
        ("AI_REQUEST_TIMEOUT", lambda: _env_optional_float("AI_REQUEST_TIMEOUT")),
    ],
)
def test_non_numeric_environment_value_names_the_variable(monkeypatch, name, reader):
    monkeypatch.setenv(name, "lots")
    with pytest.raises(ConfigError, match=name):
        reader()


def test_numeric_environment_values_are_parsed(monkeypatch):
    monkeypatch.setenv("API_PORT", "9001")
    monkeypatch.setenv("AI_REQUEST_TIMEOUT", " ")
    assert _env_int("API_PORT", "8000") == 9001
    assert _env_optional_float("AI_REQUEST_TIMEOUT") is None
