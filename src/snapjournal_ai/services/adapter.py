"""Language-model adapter facade.

The one object the host talks to. It picks a backend driver once, at
construction, and routes every operation to it:

    backend tag        chat / list / probe        embed
    http-runner        HttpRunnerBackend          HttpRunnerBackend (/api/embed)
    process-binary     ProcessBinaryBackend       StandInEmbeddingProvider
"""

from collections.abc import Sequence

import httpx

from snapjournal_ai.backends import HttpRunnerBackend, ProcessBinaryBackend, StandInEmbeddingProvider
from snapjournal_ai.config import BACKEND_ALIASES, Settings, settings
from snapjournal_ai.dto import ChatRequest, ChatResponse, EmbeddingRequest, EmbeddingResponse
from snapjournal_ai.entities import BackendSelector, HttpRunner, ProcessBinary, ThemeReport
from snapjournal_ai.errors import ConfigError
from snapjournal_ai.logging_config import get_logger
from snapjournal_ai.protocols import EmbeddingProvider, ModelBackend
from snapjournal_ai.services.theme_analyzer import ThemeAnalyzer

logger = get_logger(__name__)


def validate_base_url(raw: str) -> str:
    """Check that raw is an http(s) URL with a host.

    Returns:
        The URL without a trailing slash

    Raises:
        ConfigError: If the URL is malformed
    """
    try:
        url = httpx.URL(raw)
    except (httpx.InvalidURL, TypeError, ValueError) as e:
        raise ConfigError(f"Malformed backend URL {raw!r}: {e}") from e
    if url.scheme not in ("http", "https") or not url.host:
        raise ConfigError(f"Backend URL must be http(s) with a host, got {raw!r}")
    return raw.rstrip("/")


class LanguageModelAdapter:
    """Facade over the local language-model backends.

    Holds only configuration fixed at construction plus the shared HTTP
    client, so one instance can serve concurrent tasks.

    Example:
        ```python
        from snapjournal_ai.services import LanguageModelAdapter

        # From environment settings
        adapter = LanguageModelAdapter.create()

        # Or explicitly
        adapter = LanguageModelAdapter("process-binary", "/usr/local/bin/llama-cli")

        async with adapter:
            if await adapter.probe():
                reply = await adapter.chat(ChatRequest(message="How was my week?"))
        ```
    """

    def __init__(
        self,
        backend: str,
        location: str = "",
        embedding_model: str | None = None,
        chat_model: str | None = None,
        *,
        advertised_models: Sequence[str] | None = None,
        discovery_command: Sequence[str] | None = None,
        max_tokens: int | None = None,
        timeout: float | None = None,
        app_name: str | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the adapter.

        Args:
            backend: "http-runner" or "process-binary" ("ollama" and "llama.cpp"
                     are accepted as older names).
            location: Base URL for the HTTP runner (falls back to settings.ollama_url),
                      executable path for the process binary.
            embedding_model: Default embedding model. Defaults to settings.
            chat_model: Default chat and analysis model. Defaults to settings.
            advertised_models: Catalog reported by the process backend.
            discovery_command: Model listing command for the HTTP runner.
            max_tokens: Generation limit for the process backend.
            timeout: Per-call deadline in seconds, None for no deadline.
            app_name: Application name used in the system prompt.
            http_client: Pre-built HTTP client for the HTTP runner.

        Raises:
            ConfigError: If the backend tag is unknown or the location is invalid
        """
        kind = BACKEND_ALIASES.get(backend, backend)
        self._embedding_model = embedding_model or settings.embedding_model
        self._chat_model = chat_model or settings.chat_model

        self._selector: BackendSelector
        self._backend: ModelBackend
        self._embeddings: EmbeddingProvider
        if kind == "http-runner":
            self._selector = HttpRunner(base_url=validate_base_url(location or settings.ollama_url))
            runner = HttpRunnerBackend(
                base_url=self._selector.base_url,
                embedding_model=self._embedding_model,
                chat_model=self._chat_model,
                discovery_command=discovery_command,
                timeout=timeout,
                app_name=app_name,
                client=http_client,
            )
            self._backend = runner
            self._embeddings = runner
        elif kind == "process-binary":
            if not location.strip():
                raise ConfigError("The process-binary backend needs an executable path")
            self._selector = ProcessBinary(executable_path=location)
            self._backend = ProcessBinaryBackend(
                executable_path=location,
                advertised_models=advertised_models,
                max_tokens=max_tokens,
                timeout=timeout,
            )
            self._embeddings = StandInEmbeddingProvider()
        else:
            raise ConfigError(f"Unsupported AI backend: {backend!r}")

        self._kind = kind
        self._themes = ThemeAnalyzer(backend=self, chat_model=self._chat_model)
        logger.info("Language-model adapter ready: %s", self._selector)

    @classmethod
    def create(
        cls,
        config: Settings | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> "LanguageModelAdapter":
        """Factory method to create the adapter from settings.

        Args:
            config: Settings to read. If None, uses the global settings.
            http_client: Optional pre-built HTTP client.

        Returns:
            Configured LanguageModelAdapter
        """
        config = config or settings
        kind = BACKEND_ALIASES.get(config.ai_backend, config.ai_backend)
        location = config.ollama_url if kind == "http-runner" else config.ai_backend_location
        return cls(
            backend=config.ai_backend,
            location=location,
            embedding_model=config.embedding_model,
            chat_model=config.chat_model,
            advertised_models=config.process_models,
            discovery_command=config.discovery_argv,
            max_tokens=config.process_max_tokens,
            timeout=config.request_timeout,
            app_name=config.app_name,
            http_client=http_client,
        )

    @property
    def backend_kind(self) -> str:
        return self._kind

    @property
    def selector(self) -> BackendSelector:
        return self._selector

    @property
    def embedding_model(self) -> str:
        return self._embedding_model

    @property
    def chat_model(self) -> str:
        return self._chat_model

    @property
    def supports_embeddings(self) -> bool:
        """Whether embed() returns real embeddings rather than stand-ins.

        Semantic features (similarity search, clustering) should check this.
        """
        return not self._embeddings.synthetic

    async def probe(self) -> bool:
        """Report whether the backend can be contacted. Never raises."""
        return await self._backend.probe()

    async def embed(self, request: EmbeddingRequest) -> EmbeddingResponse:
        """Generate an embedding.

        Args:
            request: Text and optional model override

        Returns:
            EmbeddingResponse; ``synthetic`` is True on the process backend

        Raises:
            BackendError: If the HTTP runner call fails
        """
        model = request.model or self._embedding_model
        vector = await self._embeddings.encode(request.text, model)
        if self._embeddings.synthetic:
            return EmbeddingResponse(vector=vector, model=self._embeddings.model_name, synthetic=True)
        return EmbeddingResponse(vector=vector, model=model, synthetic=False)

    async def chat(self, request: ChatRequest) -> ChatResponse:
        """Generate a companion reply.

        Raises:
            BackendError: On transport/spawn failure or a failed backend call
        """
        return await self._backend.chat(request)

    async def list_models(self) -> list[str]:
        """List the models the backend advertises.

        Raises:
            BackendError: If the HTTP runner's discovery command cannot start
        """
        return await self._backend.list_models()

    async def analyze_themes(self, entries: Sequence[str]) -> ThemeReport:
        """Analyze entry bodies for recurring themes.

        Backend failures are absorbed into a fallback report.
        """
        return await self._themes.analyze(entries)

    async def close(self) -> None:
        """Release the shared HTTP client, if any."""
        if isinstance(self._backend, HttpRunnerBackend):
            await self._backend.close()

    async def __aenter__(self) -> "LanguageModelAdapter":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()
