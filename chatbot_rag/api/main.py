"""
FastAPI application with assembled routers.

Initializes FastAPI app with all API routers and configures uvicorn server.

Dependencies: fastapi, chatbot_rag.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from chatbot_rag.api.deps.dependencies import get_service_cache
from chatbot_rag.boundary.db.create_tables import create_all_tables
from chatbot_rag.configs import get_settings
from chatbot_rag.observability import configure_logging
from chatbot_rag.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware
from .routers import (
    chat_router,
    documents_router,
    health_router,
    ingest_router,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Configures logging, creates tables, and pre-warms the service cache.
    """
    settings = get_settings()
    configure_logging(settings.log_level)
    logger = logging.getLogger("uvicorn")

    # Startup
    await create_all_tables()
    logger.info("Database tables ready")

    logger.info("Pre-warming service cache...")
    cache = get_service_cache()
    # Trigger property access to load instances
    _ = cache.vector_store
    _ = cache.embedding_gateway
    _ = cache.generation_chain
    logger.info("Service cache pre-warmed")

    yield

    # Shutdown
    cache.clear()
    logger.info("Service cache cleared")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    settings = get_settings()
    app = FastAPI(
        title="Chatbot RAG API",
        description="Multi-tenant retrieval-augmented chatbot backend",
        version="0.1.0",
        debug=settings.debug,
        docs_url=None if settings.is_production else "/docs",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add observability middleware
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    # Register all routers under the versioned prefix
    for router in (health_router, chat_router, ingest_router, documents_router):
        app.include_router(router, prefix=settings.api_prefix)

    return app


app = create_app()


if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run(
        "chatbot_rag.api.main:app",
        host=settings.host,
        port=settings.port,
    )
