from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from snapjournal_ai import __version__
from snapjournal_ai.api.dependencies import AdapterDep, HandlerDep, lifespan
from snapjournal_ai.config import settings
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

app = FastAPI(
    title="SnapJournal AI",
    description="Local language-model companion for the SnapJournal desktop app",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,  # type: ignore[arg-type]
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
async def root() -> dict[str, Any]:
    """Root endpoint with app information."""
    return {
        "name": settings.app_name,
        "version": __version__,
        "description": "Local-first journaling with a private AI companion",
        "endpoints": {
            "availability": "/ai/availability",
            "models": "/ai/models",
            "config": "/ai/config",
            "embedding": "/ai/embedding",
            "chat": "/ai/chat",
            "themes": "/ai/themes",
            "health": "/health",
            "docs": "/docs",
        },
    }


@app.get("/health", response_model=HealthCheckResponse)
async def health(handler: HandlerDep) -> HealthCheckResponse:
    """Health check endpoint."""
    return await handler.health_check()


@app.get("/ai/availability", response_model=AvailabilityResponse)
async def check_ai_availability(handler: HandlerDep) -> AvailabilityResponse:
    """Check whether the configured backend can be contacted."""
    return await handler.check_availability()


@app.get("/ai/models", response_model=ModelListResponse)
async def get_ai_models(handler: HandlerDep) -> ModelListResponse:
    """List the models the backend advertises."""
    return await handler.list_models()


@app.get("/ai/config")
async def get_ai_config(adapter: AdapterDep) -> dict[str, Any]:
    """Describe the adapter's configuration."""
    return {
        "backend": adapter.backend_kind,
        "chat_model": adapter.chat_model,
        "embedding_model": adapter.embedding_model,
        "real_embeddings": adapter.supports_embeddings,
    }


@app.post("/ai/embedding", response_model=EmbeddingResponse)
async def generate_embedding(request: EmbeddingRequest, handler: HandlerDep) -> EmbeddingResponse:
    """
    Generate an embedding for a piece of text.

    Args:
        request: Text and optional model override.

    Returns:
        The vector, the model that produced it, and whether it is a stand-in.
    """
    return await handler.generate_embedding(request)


@app.post("/ai/chat", response_model=ChatResponse)
async def generate_chat_response(request: ChatRequest, handler: HandlerDep) -> ChatResponse:
    """
    Generate a companion reply.

    Args:
        request: Message, optional entry context and optional model override.

    Returns:
        The trimmed reply and the model that produced it.
    """
    return await handler.generate_chat(request)


@app.post("/ai/themes", response_model=ThemeReportResponse)
async def analyze_echo_patterns(request: AnalyzeThemesRequest, handler: HandlerDep) -> ThemeReportResponse:
    """
    Find recurring themes across journal entries.

    Args:
        request: Entry bodies to analyze.

    Returns:
        Patterns, insights and mood trends.
    """
    return await handler.analyze_themes(request)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "snapjournal_ai.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
