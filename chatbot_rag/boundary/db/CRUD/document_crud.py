"""
Document CRUD operations.

Provides Create, Read, Update, Delete operations for DocumentModel
with chatbot-scoped queries and status tracking.

Dependencies: sqlalchemy, chatbot_rag.boundary.db.models
System role: Document persistence operations
"""

from typing import Sequence

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from chatbot_rag.boundary.db.CRUD.base_crud import ChatbotScopedCRUD
from chatbot_rag.boundary.db.models.chunk_model import ChunkModel
from chatbot_rag.boundary.db.models.document_model import DocumentModel, DocumentStatus


class DocumentCRUD(ChatbotScopedCRUD[DocumentModel]):
    """
    CRUD operations for DocumentModel.

    Adds per-document embedding counts and status transitions.
    """

    def __init__(self) -> None:
        """Initialize DocumentCRUD with DocumentModel."""
        super().__init__(DocumentModel)

    async def get_by_chatbot_id(
        self,
        session: AsyncSession,
        chatbot_id: int,
    ) -> Sequence[DocumentModel]:
        """Retrieve a chatbot's documents, newest first."""
        return await self.list_for_chatbot(
            session,
            chatbot_id,
            order_by=(DocumentModel.created_at.desc(), DocumentModel.id.desc()),
        )

    async def embedding_counts(
        self,
        session: AsyncSession,
        chatbot_id: int,
    ) -> dict[int, int]:
        """
        Count stored chunks per document for a chatbot.

        Returns:
            dict: document id -> chunk count (documents without chunks are absent)
        """
        stmt = (
            select(ChunkModel.document_id, func.count(ChunkModel.id))
            .join(DocumentModel, DocumentModel.id == ChunkModel.document_id)
            .where(DocumentModel.chatbot_id == chatbot_id)
            .group_by(ChunkModel.document_id)
        )
        result = await session.execute(stmt)
        return {document_id: count for document_id, count in result.all()}

    async def update_status(
        self,
        session: AsyncSession,
        id: int,
        status: DocumentStatus,
        error_message: str | None = None,
        chunk_count: int | None = None,
    ) -> DocumentModel | None:
        """
        Update document processing status.

        Args:
            session: Async database session
            id: Document id
            status: New processing status
            error_message: Error details if status is FAILED
            chunk_count: Stored chunk count if known

        Returns:
            Updated DocumentModel if found, None otherwise
        """
        update_fields: dict = {"status": status, "error_message": error_message}
        if chunk_count is not None:
            update_fields["chunk_count"] = chunk_count
        return await self.update_by_id(session, id, **update_fields)

    async def mark_processing(self, session: AsyncSession, id: int) -> DocumentModel | None:
        """Mark document as being chunked and embedded."""
        return await self.update_status(session, id, DocumentStatus.PROCESSING)

    async def mark_completed(
        self,
        session: AsyncSession,
        id: int,
        chunk_count: int,
    ) -> DocumentModel | None:
        """
        Mark document as successfully processed.

        Args:
            session: Async database session
            id: Document id
            chunk_count: Number of chunks stored

        Returns:
            Updated DocumentModel if found, None otherwise
        """
        return await self.update_status(
            session, id, DocumentStatus.COMPLETED, chunk_count=chunk_count
        )

    async def mark_failed(
        self,
        session: AsyncSession,
        id: int,
        error_message: str,
    ) -> DocumentModel | None:
        """
        Mark document as failed with error details.

        Args:
            session: Async database session
            id: Document id
            error_message: Human-readable error description

        Returns:
            Updated DocumentModel if found, None otherwise
        """
        return await self.update_status(
            session, id, DocumentStatus.FAILED, error_message[:2048], chunk_count=0
        )


document_crud = DocumentCRUD()
