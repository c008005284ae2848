"""
In-process vector store.

Loads the chatbot's chunk embeddings and ranks them with NumPy. Used with
SQLite in development and tests, where no vector operator exists.

Dependencies: numpy, sqlalchemy, chatbot_rag.boundary.vdb.vector_store_base
System role: Development vector search engine
"""

import numpy as np
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from chatbot_rag.boundary.db.models.chunk_model import ChunkModel
from chatbot_rag.boundary.db.models.document_model import DocumentModel
from chatbot_rag.boundary.vdb.vector_schemas import VectorSearchResult
from chatbot_rag.boundary.vdb.vector_store_base import VectorStore


def cosine_distances(matrix: np.ndarray, query: np.ndarray) -> np.ndarray:
    """
    Cosine distance between each row of matrix and query.

    Zero vectors get distance 1.0 (no similarity).
    """
    norms = np.linalg.norm(matrix, axis=1) * np.linalg.norm(query)
    dots = matrix @ query
    similarity = np.divide(dots, norms, out=np.zeros_like(dots), where=norms > 0)
    return 1.0 - similarity


class LocalVectorStore(VectorStore):
    """Cosine search computed in-process over the tenant's rows."""

    async def _rank(
        self,
        session: AsyncSession,
        chatbot_id: int,
        query_embedding: list[float],
        limit: int,
    ) -> list[VectorSearchResult]:
        stmt = (
            select(ChunkModel.id, ChunkModel.document_id, ChunkModel.content, ChunkModel.embedding)
            .join(DocumentModel, DocumentModel.id == ChunkModel.document_id)
            .where(DocumentModel.chatbot_id == chatbot_id)
            .order_by(ChunkModel.id)
        )
        rows = (await session.execute(stmt)).all()
        if not rows:
            return []

        matrix = np.asarray([row.embedding for row in rows], dtype=np.float64)
        query = np.asarray(query_embedding, dtype=np.float64)
        distances = cosine_distances(matrix, query)

        # Rows are in id order, so a stable sort keeps insertion order on ties.
        order = np.argsort(distances, kind="stable")[:limit]
        return [
            VectorSearchResult(
                chunk_id=rows[i].id,
                document_id=rows[i].document_id,
                content=rows[i].content,
                distance=float(distances[i]),
            )
            for i in order
        ]
