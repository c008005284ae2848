"""
Vector store factory for selecting between local (dev) and pgvector (prod).

Depends on VECTOR_STORE_STORE_TYPE environment variable.
Provides consistent interface regardless of underlying implementation.

Dependencies: chatbot_rag.boundary.vdb, chatbot_rag.configs
System role: Vector store instantiation and selection
"""

import logging

from chatbot_rag.boundary.vdb.local_vector_store import LocalVectorStore
from chatbot_rag.boundary.vdb.pgvector_store import PgVectorStore
from chatbot_rag.boundary.vdb.vector_store_base import VectorStore
from chatbot_rag.configs import get_settings

logger = logging.getLogger(__name__)


def get_vector_store() -> VectorStore:
    """
    Factory function to get vector store based on environment configuration.

    Returns:
        LocalVectorStore or PgVectorStore: Configured vector store instance

    Raises:
        ValueError: If VECTOR_STORE_STORE_TYPE is invalid
    """
    settings = get_settings()
    store_type = settings.vector_store.store_type.lower()
    dimension = settings.vector_store.embedding_dimension

    if store_type == "local":
        logger.info(f"{__name__}:get_vector_store - Creating local vector store (dev mode)")
        return LocalVectorStore(dimension=dimension)

    if store_type == "pgvector":
        logger.info(f"{__name__}:get_vector_store - Creating pgvector store (production mode)")
        return PgVectorStore(dimension=dimension)

    raise ValueError(
        f"Invalid VECTOR_STORE_STORE_TYPE: {store_type}. "
        f"Must be 'local' (dev) or 'pgvector' (production)."
    )
