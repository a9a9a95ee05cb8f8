"""Handler layer for HTTP endpoints.

Handlers depend on the adapter facade, never on backend drivers directly.

Architecture:
    Handler -> Adapter (facade) -> Backend driver
    (HTTP)  -> (Business)        -> (Ollama / llama.cpp)
"""

from .ai_handler import AIHandler

__all__ = [
    "AIHandler",
]
