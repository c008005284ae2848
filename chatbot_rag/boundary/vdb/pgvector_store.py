"""
pgvector-backed vector store.

Ranks inside PostgreSQL with the `<=>` cosine distance operator.

Dependencies: sqlalchemy, pgvector, chatbot_rag.boundary.vdb.vector_store_base
System role: Production vector search engine
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from chatbot_rag.boundary.db.models.chunk_model import ChunkModel
from chatbot_rag.boundary.db.models.document_model import DocumentModel
from chatbot_rag.boundary.vdb.vector_schemas import VectorSearchResult
from chatbot_rag.boundary.vdb.vector_store_base import VectorStore


class PgVectorStore(VectorStore):
    """Cosine search executed by PostgreSQL + pgvector."""

    async def _rank(
        self,
        session: AsyncSession,
        chatbot_id: int,
        query_embedding: list[float],
        limit: int,
    ) -> list[VectorSearchResult]:
        distance = ChunkModel.embedding.cosine_distance(query_embedding).label("distance")
        stmt = (
            select(ChunkModel.id, ChunkModel.document_id, ChunkModel.content, distance)
            .join(DocumentModel, DocumentModel.id == ChunkModel.document_id)
            .where(DocumentModel.chatbot_id == chatbot_id)
            .order_by(distance, ChunkModel.id)
            .limit(limit)
        )
        result = await session.execute(stmt)
        return [
            VectorSearchResult(
                chunk_id=row.id,
                document_id=row.document_id,
                content=row.content,
                distance=float(row.distance),
            )
            for row in result.all()
        ]
