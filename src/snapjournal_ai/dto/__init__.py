"""Data Transfer Objects for the adapter and its API.

These Pydantic models are the value records that cross the adapter
boundary and the HTTP API. Internal analysis results use entities from the
entities package.
"""

from .requests import AnalyzeThemesRequest, ChatRequest, EmbeddingRequest
from .responses import (
    AvailabilityResponse,
    ChatResponse,
    EmbeddingResponse,
    HealthCheckResponse,
    ModelListResponse,
    ThemePatternItem,
    ThemeReportResponse,
)

__all__ = [
    "EmbeddingRequest",
    "ChatRequest",
    "AnalyzeThemesRequest",
    "EmbeddingResponse",
    "ChatResponse",
    "ThemePatternItem",
    "ThemeReportResponse",
    "ModelListResponse",
    "AvailabilityResponse",
    "HealthCheckResponse",
]
