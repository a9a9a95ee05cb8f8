"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Adapter and handler stored in app.state during lifespan
    - Dependency functions retrieve from request.app.state
    - Clean separation, no global mutable state
"""

from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, HTTPException, Request, status

from snapjournal_ai.handlers import AIHandler
from snapjournal_ai.logging_config import get_logger, setup_logging
from snapjournal_ai.services import LanguageModelAdapter

logger = get_logger(__name__)


def get_adapter(request: Request) -> LanguageModelAdapter:
    """Dependency injection for LanguageModelAdapter from app.state.

    Args:
        request: FastAPI Request object

    Returns:
        The LanguageModelAdapter instance from app.state

    Raises:
        HTTPException: 503 if the adapter is not initialized
    """
    adapter = getattr(request.app.state, "adapter", None)
    if adapter is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="AI service not initialized",
        )
    return adapter


def get_handler(request: Request) -> AIHandler:
    """Dependency injection for AIHandler from app.state.

    Args:
        request: FastAPI Request object

    Returns:
        The AIHandler instance from app.state

    Raises:
        HTTPException: 503 if the handler is not initialized
    """
    handler = getattr(request.app.state, "ai_handler", None)
    if handler is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="AI service not initialized",
        )
    return handler


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI app.

    Initializes the adapter from settings and stores it, with its handler,
    in app.state. The adapter's HTTP client is closed on shutdown.

    Args:
        app: The FastAPI application instance

    Yields:
        None
    """
    setup_logging()

    adapter = LanguageModelAdapter.create()
    app.state.adapter = adapter
    app.state.ai_handler = AIHandler(adapter=adapter)

    logger.info("Backend: %s", adapter.selector)
    logger.info("Chat model: %s, embedding model: %s", adapter.chat_model, adapter.embedding_model)
    if not adapter.supports_embeddings:
        logger.warning("Embeddings are deterministic stand-ins on the %s backend", adapter.backend_kind)

    yield

    await adapter.close()
    del app.state.ai_handler
    del app.state.adapter
    logger.info("AI service shut down")


# Type aliases for cleaner dependency injection
HandlerDep = Annotated[AIHandler, Depends(get_handler)]
AdapterDep = Annotated[LanguageModelAdapter, Depends(get_adapter)]
