"""
Retrieval service.

Embeds a query, ranks the chatbot's chunks, and hydrates the hits with
their documents.

Dependencies: chatbot_rag.core.embedding_gateway, chatbot_rag.boundary.vdb
System role: Context retrieval for chat
"""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from chatbot_rag.boundary.vdb.vector_schemas import SimilarChunk
from chatbot_rag.boundary.vdb.vector_store_base import VectorStore
from chatbot_rag.core.embedding_gateway import EmbeddingGateway
from chatbot_rag.core.exceptions import RetrievalError

logger = logging.getLogger(__name__)


class RetrievalService:
    """Query embedding → tenant-scoped vector search → hydration."""

    def __init__(
        self,
        db: AsyncSession,
        embedding_gateway: EmbeddingGateway,
        vector_store: VectorStore,
    ) -> None:
        self.db = db
        self.embedding_gateway = embedding_gateway
        self.vector_store = vector_store

    async def find_similar(self, query: str, chatbot_id: int, limit: int = 3) -> list[SimilarChunk]:
        """
        Find the chatbot's chunks most similar to the query.

        A chatbot without chunks yields an empty list without calling the
        embedding providers.

        Args:
            query: User message
            chatbot_id: Tenant scope
            limit: Maximum number of chunks

        Returns:
            list[SimilarChunk]: Ranked, hydrated chunks

        Raises:
            EmbeddingError / ProviderConfigurationError: Query embedding failed
            RetrievalError: Database failure during search
        """
        try:
            if await self.vector_store.count_for_chatbot(self.db, chatbot_id) == 0:
                logger.info(f"{__name__}:find_similar - chatbot_id={chatbot_id} has no chunks")
                return []

            query_embedding = await self.embedding_gateway.embed(query)
            results = await self.vector_store.search(self.db, chatbot_id, query_embedding, limit)
            chunks = await self.vector_store.hydrate(self.db, chatbot_id, results)
        except SQLAlchemyError as e:
            raise RetrievalError(
                f"Vector search failed: {type(e).__name__}",
                chatbot_id=chatbot_id,
            ) from e

        logger.info(
            f"{__name__}:find_similar - chatbot_id={chatbot_id} retrieved {len(chunks)} chunks",
            extra={"similarities": [round(chunk.similarity, 4) for chunk in chunks]},
        )
        return chunks
