import os
import shlex
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

from snapjournal_ai.errors import ConfigError

load_dotenv()

BACKEND_KINDS = ("http-runner", "process-binary")
# Tags used by earlier releases of the desktop app
BACKEND_ALIASES = {"ollama": "http-runner", "llama.cpp": "process-binary"}
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _env_int(name: str, default: str) -> int:
    value = os.getenv(name, default)
    try:
        return int(value)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {value!r}") from None


def _env_optional_float(name: str) -> float | None:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return None
    try:
        return float(value)
    except ValueError:
        raise ConfigError(f"{name} must be a number of seconds, got {value!r}") from None


def _model_list(value: str) -> tuple[str, ...]:
    return tuple(name.strip() for name in value.split(",") if name.strip())


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Backend selection
    ai_backend: str = os.getenv("AI_BACKEND", "http-runner")
    # Executable path for the process backend (the HTTP runner uses ollama_url)
    ai_backend_location: str = os.getenv("AI_BACKEND_LOCATION", "")

    # Ollama (historical name, kept for the HTTP runner base URL)
    ollama_url: str = os.getenv("OLLAMA_URL", "http://localhost:11434")
    discovery_command: str = os.getenv("OLLAMA_DISCOVERY_COMMAND", "ollama list")

    # Models
    embedding_model: str = os.getenv("EMBEDDING_MODEL", "nomic-embed-text")
    chat_model: str = os.getenv("CHAT_MODEL", "llama3.2")

    # Process backend
    process_models: tuple[str, ...] = _model_list(
        os.getenv("PROCESS_BACKEND_MODELS", "llama2:7b,codellama:7b")
    )
    process_max_tokens: int = _env_int("PROCESS_BACKEND_MAX_TOKENS", "256")

    # Per-call deadline in seconds; unset means no deadline
    request_timeout: float | None = _env_optional_float("AI_REQUEST_TIMEOUT")

    # Name used in the companion's system prompt
    app_name: str = os.getenv("APP_NAME", "MyFace SnapJournal")

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # API
    api_host: str = os.getenv("API_HOST", "127.0.0.1")
    api_port: int = _env_int("API_PORT", "8000")
    api_reload: bool = os.getenv("API_RELOAD", "false").lower() == "true"

    @property
    def discovery_argv(self) -> list[str]:
        """Split the discovery command into an argument vector.

        Returns:
            Arguments suitable for ``asyncio.create_subprocess_exec``
        """
        return shlex.split(self.discovery_command)

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.ai_backend not in BACKEND_KINDS and self.ai_backend not in BACKEND_ALIASES:
            raise ConfigError(
                f"AI_BACKEND must be one of {list(BACKEND_KINDS)}, got {self.ai_backend!r}"
            )

        if self.process_max_tokens <= 0:
            raise ConfigError("PROCESS_BACKEND_MAX_TOKENS must be positive")

        if self.request_timeout is not None and self.request_timeout <= 0:
            raise ConfigError("AI_REQUEST_TIMEOUT must be positive when set")

        if self.log_level.upper() not in LOG_LEVELS:
            raise ConfigError(f"LOG_LEVEL must be one of {list(LOG_LEVELS)}, got {self.log_level!r}")

        if not self.discovery_argv:
            raise ConfigError("OLLAMA_DISCOVERY_COMMAND must not be empty")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
