"""Ollama HTTP runner backend.

Talks to a locally running Ollama server for chat and embeddings, and uses
the ``ollama`` command line for model discovery and probing.

Requirements:
    - Ollama installed: https://ollama.com
    - Models pulled: `ollama pull llama3.2` and `ollama pull nomic-embed-text`
    - Ollama running: `ollama serve` (usually runs automatically)

Endpoints used:
    - POST /api/chat  (non-streaming)
    - POST /api/embed
"""

import asyncio
from collections.abc import Sequence
from typing import Any

import httpx

from snapjournal_ai.backends.process import can_spawn, run_command
from snapjournal_ai.config import settings
from snapjournal_ai.dto import ChatRequest, ChatResponse
from snapjournal_ai.errors import BackendError, Cancelled
from snapjournal_ai.logging_config import get_logger
from snapjournal_ai.prompts import chat_messages

logger = get_logger(__name__)


class HttpRunnerBackend:
    """HTTP runner implementation of the ModelBackend and EmbeddingProvider protocols.

    This class satisfies both protocols through structural typing - no
    explicit inheritance needed. One ``httpx.AsyncClient`` is shared by all
    calls, so a single instance can serve concurrent tasks.

    Example:
        ```python
        backend = HttpRunnerBackend(
            base_url="http://localhost:11434",
            embedding_model="nomic-embed-text",
            chat_model="llama3.2",
        )
        reply = await backend.chat(ChatRequest(message="Hello"))
        print(reply.response)
        await backend.close()
        ```
    """

    def __init__(
        self,
        base_url: str | None = None,
        embedding_model: str | None = None,
        chat_model: str | None = None,
        discovery_command: Sequence[str] | None = None,
        timeout: float | None = None,
        app_name: str | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the HTTP runner backend.

        Args:
            base_url: Ollama API base URL. Defaults to settings.ollama_url.
            embedding_model: Default embedding model. Defaults to settings.embedding_model.
            chat_model: Default chat model. Defaults to settings.chat_model.
            discovery_command: Command listing installed models. Defaults to settings.
            timeout: Per-call deadline in seconds, None for no deadline.
            app_name: Application name used in the system prompt.
            client: Pre-built HTTP client (tests, shared pools). Not closed by close().
        """
        self._base_url = (base_url or settings.ollama_url).rstrip("/")
        self._embedding_model = embedding_model or settings.embedding_model
        self._chat_model = chat_model or settings.chat_model
        self._discovery_command = list(discovery_command or settings.discovery_argv)
        self._timeout = timeout
        self._app_name = app_name
        self._client = client
        self._owns_client = client is None

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load the async HTTP client.

        Returns:
            The httpx.AsyncClient instance
        """
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                limits=httpx.Limits(max_connections=100, max_keepalive_connections=20),
            )
            self._owns_client = True
        return self._client

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def model_name(self) -> str:
        """Default embedding model."""
        return self._embedding_model

    @property
    def chat_model(self) -> str:
        return self._chat_model

    @property
    def synthetic(self) -> bool:
        return False

    def chat_payload(self, request: ChatRequest) -> dict[str, Any]:
        """Build the JSON body for POST /api/chat.

        Args:
            request: The chat request

        Returns:
            Body with model, system+user messages and stream disabled
        """
        return {
            "model": request.model or self._chat_model,
            "messages": chat_messages(request.message, request.context, self._app_name),
            "stream": False,
        }

    async def chat(self, request: ChatRequest) -> ChatResponse:
        """Generate a non-streaming chat reply.

        Args:
            request: The chat request

        Returns:
            ChatResponse with the assistant message content

        Raises:
            BackendError: On transport failure, error status, or malformed body
            Cancelled: If the call is cancelled while in flight
        """
        payload = self.chat_payload(request)
        data = await self._post_json("/api/chat", payload)

        message = data.get("message")
        content = message.get("content") if isinstance(message, dict) else None
        if not isinstance(content, str):
            raise BackendError(f"Unexpected chat response format: missing message.content in {data}")

        return ChatResponse(
            response=content.strip(),
            model=payload["model"],
            tokens_used=self._tokens_used(data),
        )

    async def encode(self, text: str, model: str | None = None) -> list[float]:
        """Generate an embedding vector for a single text.

        Args:
            text: The text to encode
            model: Embedding model override

        Returns:
            The embedding vector as a list of floats

        Raises:
            BackendError: If the Ollama API request fails or the format is invalid
        """
        payload = {
            "model": model or self._embedding_model,
            "input": text,
        }
        data = await self._post_json("/api/embed", payload)

        # Ollama returns {"embeddings": [[...]]} for single input
        vector = None
        embeddings = data.get("embeddings")
        if isinstance(embeddings, list) and embeddings:
            vector = embeddings[0]
        # Older servers answer /api/embeddings style: {"embedding": [...]}
        elif isinstance(data.get("embedding"), list):
            vector = data["embedding"]

        if isinstance(vector, list):
            try:
                return [float(value) for value in vector]
            except (TypeError, ValueError) as e:
                raise BackendError(f"Embedding contains non-numeric values: {e}") from e

        raise BackendError(f"Unexpected embedding response format: {data}")

    async def list_models(self) -> list[str]:
        """List installed models via the discovery command.

        The first line of output is a header; each further non-empty line
        starts with a model identifier.

        Returns:
            Model identifiers, or an empty list if the command fails

        Raises:
            BackendError: If the discovery command cannot be started
        """
        result = await run_command(self._discovery_command, timeout=self._timeout)
        if not result.ok:
            logger.warning(
                "Model discovery exited with status %s: %s",
                result.returncode,
                result.stderr.strip(),
            )
            return []
        return parse_model_listing(result.stdout)

    async def probe(self) -> bool:
        """Check that the discovery command can be run.

        Returns:
            True if it spawned and finished, False otherwise
        """
        return await can_spawn(self._discovery_command, timeout=self._timeout)

    async def close(self) -> None:
        """Close the async HTTP client if this backend created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def _post_json(self, path: str, payload: dict[str, Any]) -> dict[str, Any]:
        url = f"{self._base_url}{path}"
        try:
            response = await self.client.post(url, json=payload)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            error_msg = f"Ollama API error: {e.response.status_code} {e.response.reason_phrase}"
            if e.response.status_code == 404:
                error_msg += f"\n  → Model not found? Try: ollama pull {payload['model']}"
            raise BackendError(error_msg, status_code=e.response.status_code) from e
        except httpx.HTTPError as e:
            error_msg = f"Ollama API error: {e}"
            if isinstance(e, httpx.ConnectError):
                error_msg += "\n  → Is Ollama running? Try: ollama serve"
            raise BackendError(error_msg) from e
        except ValueError as e:
            raise BackendError(f"Ollama returned a non-JSON body from {path}: {e}") from e
        except asyncio.CancelledError as e:
            raise Cancelled(f"Request to {path} was cancelled") from e

        if not isinstance(data, dict):
            raise BackendError(f"Unexpected response from {path}: {data!r}")
        return data

    @staticmethod
    def _tokens_used(data: dict[str, Any]) -> int | None:
        counts = [
            data[key]
            for key in ("prompt_eval_count", "eval_count")
            if isinstance(data.get(key), int) and not isinstance(data.get(key), bool)
        ]
        return sum(counts) if counts else None


def parse_model_listing(output: str) -> list[str]:
    """Parse `ollama list` output into model identifiers.

    Args:
        output: Command stdout, header line first

    Returns:
        First whitespace-delimited token of each non-empty line after the header
    """
    models = []
    for line in output.splitlines()[1:]:
        tokens = line.split()
        if tokens:
            models.append(tokens[0])
    return models
