"""
Chunk CRUD operations.

Dependencies: sqlalchemy, chatbot_rag.boundary.db.models
System role: Chunk row maintenance outside of vector search
"""

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from chatbot_rag.boundary.db.CRUD.base_crud import BaseCRUD
from chatbot_rag.boundary.db.models.chunk_model import ChunkModel
from chatbot_rag.boundary.db.models.document_model import DocumentModel


class ChunkCRUD(BaseCRUD[ChunkModel]):
    """CRUD operations for ChunkModel."""

    def __init__(self) -> None:
        """Initialize ChunkCRUD with ChunkModel."""
        super().__init__(ChunkModel)

    async def delete_by_document_id(self, session: AsyncSession, document_id: int) -> int:
        """
        Delete every chunk of a document.

        Returns:
            int: Number of deleted chunks
        """
        stmt = delete(ChunkModel).where(ChunkModel.document_id == document_id)
        result = await session.execute(stmt)
        return result.rowcount

    async def count_for_chatbot(self, session: AsyncSession, chatbot_id: int) -> int:
        """Count chunks across all of a chatbot's documents."""
        stmt = (
            select(func.count(ChunkModel.id))
            .join(DocumentModel, DocumentModel.id == ChunkModel.document_id)
            .where(DocumentModel.chatbot_id == chatbot_id)
        )
        result = await session.execute(stmt)
        return result.scalar_one()


chunk_crud = ChunkCRUD()
