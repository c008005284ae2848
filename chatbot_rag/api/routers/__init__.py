"""API routers."""

from .chat import router as chat_router
from .documents import router as documents_router
from .health import router as health_router
from .ingest import router as ingest_router

__all__ = [
    "chat_router",
    "documents_router",
    "health_router",
    "ingest_router",
]
