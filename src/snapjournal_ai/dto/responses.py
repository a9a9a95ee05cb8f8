"""Response DTOs for adapter operations and API endpoints."""

from typing import Annotated

from pydantic import BaseModel, Field

from snapjournal_ai.entities import ThemeReport


class EmbeddingResponse(BaseModel):
    """Response DTO for an embedding."""

    vector: list[float] = Field(..., description="The embedding vector")
    model: str = Field(..., description="Model that produced the vector")
    synthetic: bool = Field(
        False,
        description="True when the vector is a deterministic stand-in, not a real embedding",
    )


class ChatResponse(BaseModel):
    """Response DTO for a companion chat turn."""

    response: str = Field(..., description="The reply, trimmed of surrounding whitespace")
    model: str = Field(..., description="Model that produced the reply")
    tokens_used: int | None = Field(
        None,
        description="Tokens consumed, when the backend reports it",
        ge=0,
    )


class ThemePatternItem(BaseModel):
    """Single theme in a theme report."""

    id: str = Field(..., description="Identifier unique within the report")
    title: str = Field(..., description="Short theme name", min_length=1)
    description: str = Field("", description="What the theme is about")
    strength: float = Field(..., description="How pronounced the theme is", ge=0.0, le=1.0)
    entry_ids: list[str] = Field(default_factory=list, description="Entries showing the theme")
    tags: list[str] = Field(default_factory=list, description="Free-form labels")
    pattern_type: str = Field("custom", description="Classification tag")


class ThemeReportResponse(BaseModel):
    """Response DTO for theme analysis."""

    patterns: list[ThemePatternItem] = Field(default_factory=list)
    insights: list[str] = Field(default_factory=list)
    mood_trends: dict[str, Annotated[float, Field(ge=0.0, le=1.0)]] = Field(
        default_factory=dict,
        description="Mood label to fraction of entries",
    )

    @classmethod
    def from_entity(cls, report: ThemeReport) -> "ThemeReportResponse":
        """Build the DTO from a domain report.

        Args:
            report: The analysis result

        Returns:
            ThemeReportResponse with the same content
        """
        return cls(
            patterns=[
                ThemePatternItem(
                    id=pattern.id,
                    title=pattern.title,
                    description=pattern.description,
                    strength=pattern.strength,
                    entry_ids=list(pattern.entry_ids),
                    tags=list(pattern.tags),
                    pattern_type=pattern.pattern_type,
                )
                for pattern in report.patterns
            ],
            insights=list(report.insights),
            mood_trends=dict(report.mood_trends),
        )


class ModelListResponse(BaseModel):
    """Response DTO for the model catalog."""

    models: list[str] = Field(default_factory=list, description="Advertised model identifiers")


class AvailabilityResponse(BaseModel):
    """Response DTO for the backend probe."""

    available: bool = Field(..., description="Whether the backend could be contacted")
    backend: str = Field(..., description="Selected backend kind")


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Health status: 'healthy' or 'degraded'")
    backend: str = Field(..., description="Selected backend kind")
    backend_available: bool = Field(..., description="Whether the backend could be contacted")
    real_embeddings: bool = Field(..., description="Whether embeddings come from a real model")
