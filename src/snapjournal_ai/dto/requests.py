"""Request DTOs for adapter operations and API endpoints."""

from pydantic import BaseModel, Field


class EmbeddingRequest(BaseModel):
    """Request DTO for generating an embedding."""

    text: str = Field(..., description="The text to embed", min_length=1)
    model: str | None = Field(
        None,
        description="Embedding model override (defaults to the adapter's embedding model)",
    )


class ChatRequest(BaseModel):
    """Request DTO for a companion chat turn."""

    message: str = Field(..., description="The user's message", min_length=1)
    context: str | None = Field(
        None,
        description="Optional context about the user's entries",
    )
    model: str | None = Field(
        None,
        description="Chat model override (defaults to the adapter's chat model)",
    )


class AnalyzeThemesRequest(BaseModel):
    """Request DTO for theme analysis over a batch of entry bodies."""

    entries: list[str] = Field(
        default_factory=list,
        description="Entry bodies, in the order they should be presented to the model",
    )
