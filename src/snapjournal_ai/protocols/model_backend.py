"""Model backend protocols."""

from typing import Protocol, runtime_checkable

from snapjournal_ai.dto import ChatRequest, ChatResponse


@runtime_checkable
class ChatBackend(Protocol):
    """Anything that can answer a chat request."""

    async def chat(self, request: ChatRequest) -> ChatResponse:
        """Produce a reply for one chat request."""
        ...


@runtime_checkable
class ModelBackend(ChatBackend, Protocol):
    """Capabilities shared by every language-model backend."""

    async def probe(self) -> bool:
        """Report whether the backend can be contacted at all.

        Returns:
            True if contact succeeded; never raises on backend errors
        """
        ...

    async def list_models(self) -> list[str]:
        """Return the model identifiers the backend advertises."""
        ...
