"""Protocol interfaces for the adapter's backends.

Protocols use structural typing, so a backend satisfies them by having the
right methods. This keeps the HTTP runner and the process binary
interchangeable behind the adapter facade and lets tests pass fakes.
"""

from .embedding_provider import EmbeddingProvider
from .model_backend import ChatBackend, ModelBackend

__all__ = [
    "ChatBackend",
    "EmbeddingProvider",
    "ModelBackend",
]
