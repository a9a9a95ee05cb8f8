"""HTTP handlers for the AI commands.

Handlers convert between DTOs and adapter calls and map adapter errors to
HTTP status codes. Cancellation is never caught here.
"""

from fastapi import HTTPException, status

from snapjournal_ai.dto import (
    AnalyzeThemesRequest,
    AvailabilityResponse,
    ChatRequest,
    ChatResponse,
    EmbeddingRequest,
    EmbeddingResponse,
    HealthCheckResponse,
    ModelListResponse,
    ThemeReportResponse,
)
from snapjournal_ai.errors import BackendError
from snapjournal_ai.services import LanguageModelAdapter


class AIHandler:
    """HTTP handlers for the adapter's operations.

    Example:
        ```python
        adapter = LanguageModelAdapter.create()
        handler = AIHandler(adapter=adapter)

        @app.post("/ai/chat", response_model=ChatResponse)
        async def chat(request: ChatRequest):
            return await handler.generate_chat(request)
        ```
    """

    def __init__(self, adapter: LanguageModelAdapter) -> None:
        self._adapter = adapter

    async def check_availability(self) -> AvailabilityResponse:
        """Handle GET /ai/availability requests."""
        available = await self._adapter.probe()
        return AvailabilityResponse(available=available, backend=self._adapter.backend_kind)

    async def list_models(self) -> ModelListResponse:
        """Handle GET /ai/models requests.

        Raises:
            HTTPException: 502 if the model catalog cannot be read
        """
        try:
            models = await self._adapter.list_models()
        except BackendError as e:
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail=f"Failed to list models: {e}",
            ) from e
        return ModelListResponse(models=models)

    async def generate_embedding(self, request: EmbeddingRequest) -> EmbeddingResponse:
        """Handle POST /ai/embedding requests.

        Raises:
            HTTPException: 502 if the backend call fails
        """
        try:
            return await self._adapter.embed(request)
        except BackendError as e:
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail=f"Failed to generate embedding: {e}",
            ) from e

    async def generate_chat(self, request: ChatRequest) -> ChatResponse:
        """Handle POST /ai/chat requests.

        Raises:
            HTTPException: 502 if the backend call fails
        """
        try:
            return await self._adapter.chat(request)
        except BackendError as e:
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail=f"Failed to generate chat response: {e}",
            ) from e

    async def analyze_themes(self, request: AnalyzeThemesRequest) -> ThemeReportResponse:
        """Handle POST /ai/themes requests.

        Backend failures never reach here; the adapter returns a fallback report.
        """
        report = await self._adapter.analyze_themes(request.entries)
        return ThemeReportResponse.from_entity(report)

    async def health_check(self) -> HealthCheckResponse:
        """Handle GET /health requests."""
        available = await self._adapter.probe()
        return HealthCheckResponse(
            status="healthy" if available else "degraded",
            backend=self._adapter.backend_kind,
            backend_available=available,
            real_embeddings=self._adapter.supports_embeddings,
        )
