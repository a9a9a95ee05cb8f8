"""Embedding provider protocol.

Defines the interface for anything that turns text into a vector:
- the Ollama HTTP runner (real embeddings)
- the deterministic stand-in vectorizer (process backend)
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class EmbeddingProvider(Protocol):
    """Protocol for embedding generation.

    Example:
        ```python
        provider: EmbeddingProvider = HttpRunnerBackend(...)
        provider: EmbeddingProvider = StandInEmbeddingProvider()
        ```
    """

    @property
    def model_name(self) -> str:
        """Return the default model identifier."""
        ...

    @property
    def synthetic(self) -> bool:
        """Return True if vectors are stand-ins rather than real embeddings."""
        ...

    async def encode(self, text: str, model: str | None = None) -> list[float]:
        """Generate an embedding vector for a single text.

        Args:
            text: The text to encode
            model: Model override, if the provider supports several

        Returns:
            The embedding vector as a list of floats
        """
        ...
