"""Backend drivers for the language-model adapter.

Each driver wraps one way of reaching a local model:
- HttpRunnerBackend: Ollama REST server (chat, embeddings)
- ProcessBinaryBackend: llama.cpp style executable (chat only)
- StandInEmbeddingProvider: deterministic vectors where no real embeddings exist

The drivers satisfy the protocols in snapjournal_ai.protocols through
structural typing, not inheritance.
"""

from snapjournal_ai.protocols import EmbeddingProvider, ModelBackend

from .http_runner import HttpRunnerBackend, parse_model_listing
from .process import CommandResult, can_spawn, run_command
from .process_binary import ProcessBinaryBackend
from .stand_in import STAND_IN_DIMENSION, STAND_IN_MODEL, StandInEmbeddingProvider, stand_in_vector

__all__ = [
    "EmbeddingProvider",
    "ModelBackend",
    "HttpRunnerBackend",
    "ProcessBinaryBackend",
    "StandInEmbeddingProvider",
    "stand_in_vector",
    "STAND_IN_DIMENSION",
    "STAND_IN_MODEL",
    "CommandResult",
    "run_command",
    "can_spawn",
    "parse_model_listing",
]
