"""
Document service.

Per-chatbot document statistics and document deletion.

Dependencies: chatbot_rag.boundary.db, chatbot_rag.boundary.vdb
System role: Document management for ingested content
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from chatbot_rag.boundary.db.CRUD.chatbot_crud import chatbot_crud
from chatbot_rag.boundary.db.CRUD.document_crud import document_crud
from chatbot_rag.boundary.db.models.document_model import DocumentModel
from chatbot_rag.boundary.vdb.vector_store_base import VectorStore
from chatbot_rag.core.exceptions import ChatbotNotFoundError, DocumentNotFoundError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DocumentSummary:
    """One document with its stored embedding count."""

    document: DocumentModel
    embedding_count: int


@dataclass(frozen=True)
class DocumentStatistics:
    """Aggregate view of a chatbot's knowledge base."""

    documents: list[DocumentSummary] = field(default_factory=list)
    content_types: dict[str, int] = field(default_factory=dict)
    latest_document_at: datetime | None = None

    @property
    def total_documents(self) -> int:
        return len(self.documents)

    @property
    def total_embeddings(self) -> int:
        return sum(summary.embedding_count for summary in self.documents)


class DocumentService:
    """Document statistics and deletion scoped by chatbot."""

    def __init__(self, db: AsyncSession, vector_store: VectorStore) -> None:
        self.db = db
        self.vector_store = vector_store

    async def get_statistics(self, chatbot_id: int) -> DocumentStatistics:
        """
        Summarize a chatbot's documents.

        Raises:
            ChatbotNotFoundError: Unknown chatbot
        """
        if not await chatbot_crud.exists(self.db, chatbot_id):
            raise ChatbotNotFoundError(chatbot_id)

        documents = await document_crud.get_by_chatbot_id(self.db, chatbot_id)
        counts = await document_crud.embedding_counts(self.db, chatbot_id)

        return DocumentStatistics(
            documents=[
                DocumentSummary(document=document, embedding_count=counts.get(document.id, 0))
                for document in documents
            ],
            content_types=dict(Counter(document.content_type for document in documents)),
            latest_document_at=documents[0].created_at if documents else None,
        )

    async def delete_document(self, chatbot_id: int, document_id: int) -> None:
        """
        Delete a document and its chunks.

        Raises:
            DocumentNotFoundError: Document missing or owned by another chatbot
        """
        document = await document_crud.get_for_chatbot(self.db, chatbot_id, document_id)
        if document is None:
            raise DocumentNotFoundError(document_id, chatbot_id)

        removed = await self.vector_store.delete_by_document(self.db, document_id)
        await document_crud.delete_for_chatbot(self.db, chatbot_id, document_id)
        await self.db.commit()
        logger.info(
            f"{__name__}:delete_document - Deleted document {document_id} and {removed} chunks"
        )
