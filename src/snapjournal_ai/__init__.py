"""SnapJournal AI - local language-model adapter for a journaling app.

This package provides a layered architecture around one facade:

Layers:
    - protocols: Interface contracts (ModelBackend, EmbeddingProvider)
    - backends: Ollama HTTP runner, llama.cpp process binary, stand-in vectors
    - services: Adapter facade and theme analysis
    - handlers: HTTP endpoint handlers
    - dto: Request/response records
    - entities: Domain models (internal)

Usage:
    ```python
    from snapjournal_ai import ChatRequest, LanguageModelAdapter

    adapter = LanguageModelAdapter.create()  # from environment settings
    adapter = LanguageModelAdapter("http-runner", "http://localhost:11434")

    reply = await adapter.chat(ChatRequest(message="Hello"))
    ```

For HTTP API:
    ```python
    from snapjournal_ai.api.app import app
    ```
"""

__version__ = "0.1.0"

from snapjournal_ai.config import get_settings, settings
from snapjournal_ai.dto import ChatRequest, ChatResponse, EmbeddingRequest, EmbeddingResponse
from snapjournal_ai.entities import HttpRunner, ProcessBinary, ThemePattern, ThemeReport
from snapjournal_ai.errors import AdapterError, BackendError, Cancelled, ConfigError
from snapjournal_ai.protocols import EmbeddingProvider, ModelBackend
from snapjournal_ai.services import LanguageModelAdapter, ThemeAnalyzer

__all__ = [
    "__version__",
    # Configuration
    "settings",
    "get_settings",
    # Facade and services
    "LanguageModelAdapter",
    "ThemeAnalyzer",
    # Protocols (interfaces)
    "ModelBackend",
    "EmbeddingProvider",
    # Records
    "EmbeddingRequest",
    "EmbeddingResponse",
    "ChatRequest",
    "ChatResponse",
    "ThemePattern",
    "ThemeReport",
    "HttpRunner",
    "ProcessBinary",
    # Errors
    "AdapterError",
    "ConfigError",
    "BackendError",
    "Cancelled",
]
