"""
Vector store interface.

Chunk writes, hydration, and deletes are shared; engines differ only in
how they rank a chatbot's chunks by cosine distance.

Dependencies: sqlalchemy, chatbot_rag.boundary.db, chatbot_rag.core.exceptions
System role: Swappable vector storage behind retrieval and ingestion
"""

import logging
from abc import ABC, abstractmethod
from typing import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from chatbot_rag.boundary.db.CRUD.chunk_crud import chunk_crud
from chatbot_rag.boundary.db.CRUD.document_crud import document_crud
from chatbot_rag.boundary.db.models.chunk_model import ChunkModel
from chatbot_rag.boundary.vdb.vector_schemas import (
    ChunkRecord,
    SimilarChunk,
    VectorSearchResult,
)
from chatbot_rag.core.exceptions import VectorStoreError

logger = logging.getLogger(__name__)


class VectorStore(ABC):
    """
    Chunk embedding store scoped by chatbot.

    Every search joins chunks to their documents and filters on the
    requesting chatbot before ranking. Results are ordered by ascending
    cosine distance with chunk id (insertion order) as tie-break.
    """

    def __init__(self, dimension: int = 768) -> None:
        self.dimension = dimension

    def _validate_dimension(self, vector: Sequence[float], operation: str) -> None:
        if len(vector) != self.dimension:
            raise VectorStoreError(
                f"Embedding has {len(vector)} dimensions, expected {self.dimension}",
                operation=operation,
            )

    async def store(
        self,
        session: AsyncSession,
        document_id: int,
        content: str,
        embedding: list[float],
        chunk_index: int = 0,
        metadata: dict | None = None,
    ) -> int:
        """
        Store one chunk with its embedding.

        Returns:
            int: New chunk id

        Raises:
            VectorStoreError: Embedding has the wrong dimension
        """
        ids = await self.store_many(
            session,
            document_id,
            [
                ChunkRecord(
                    content=content,
                    embedding=embedding,
                    chunk_index=chunk_index,
                    metadata=metadata or {},
                )
            ],
        )
        return ids[0]

    async def store_many(
        self,
        session: AsyncSession,
        document_id: int,
        records: Sequence[ChunkRecord],
    ) -> list[int]:
        """
        Store chunks of one document. Validates every embedding before writing any.

        Args:
            session: Async database session (caller commits or rolls back)
            document_id: Parent document id
            records: Chunks with embeddings

        Returns:
            list[int]: New chunk ids in record order

        Raises:
            VectorStoreError: Any embedding has the wrong dimension
        """
        for record in records:
            self._validate_dimension(record.embedding, "store")

        rows = [
            ChunkModel(
                document_id=document_id,
                chunk_index=record.chunk_index,
                content=record.content,
                embedding=list(record.embedding),
                chunk_metadata=record.metadata,
            )
            for record in records
        ]
        session.add_all(rows)
        await session.flush()
        return [row.id for row in rows]

    async def search(
        self,
        session: AsyncSession,
        chatbot_id: int,
        query_embedding: list[float],
        limit: int,
    ) -> list[VectorSearchResult]:
        """
        Rank the chatbot's chunks by cosine distance to the query.

        Args:
            session: Async database session
            chatbot_id: Tenant scope
            query_embedding: Query vector
            limit: Maximum number of results (never padded)

        Returns:
            list[VectorSearchResult]: Ascending distance, ties by chunk id

        Raises:
            VectorStoreError: Query embedding has the wrong dimension
        """
        self._validate_dimension(query_embedding, "search")
        if limit <= 0:
            return []
        results = await self._rank(session, chatbot_id, query_embedding, limit)
        logger.info(
            f"{__name__}:search - chatbot_id={chatbot_id} limit={limit} hits={len(results)}"
        )
        return results

    @abstractmethod
    async def _rank(
        self,
        session: AsyncSession,
        chatbot_id: int,
        query_embedding: list[float],
        limit: int,
    ) -> list[VectorSearchResult]:
        """Engine-specific ranking over the chatbot's chunks."""

    async def hydrate(
        self,
        session: AsyncSession,
        chatbot_id: int,
        results: Sequence[VectorSearchResult],
    ) -> list[SimilarChunk]:
        """
        Attach parent documents to ranked hits, preserving order.

        Hits whose document no longer exists are dropped.
        """
        documents = await document_crud.get_many_for_chatbot(
            session, chatbot_id, {result.document_id for result in results}
        )
        by_id = {document.id: document for document in documents}

        hydrated = []
        for result in results:
            document = by_id.get(result.document_id)
            if document is None:
                logger.info(
                    f"{__name__}:hydrate - Dropping chunk {result.chunk_id}, "
                    f"document {result.document_id} no longer exists"
                )
                continue
            hydrated.append(
                SimilarChunk(
                    chunk_id=result.chunk_id,
                    document_id=result.document_id,
                    content=result.content,
                    distance=result.distance,
                    similarity=1.0 - result.distance,
                    document_url=document.url,
                    content_type=document.content_type,
                )
            )
        return hydrated

    async def delete_by_document(self, session: AsyncSession, document_id: int) -> int:
        """Delete every chunk of a document; returns the count removed."""
        return await chunk_crud.delete_by_document_id(session, document_id)

    async def count_for_chatbot(self, session: AsyncSession, chatbot_id: int) -> int:
        """Count stored chunks for a chatbot."""
        return await chunk_crud.count_for_chatbot(session, chatbot_id)
