"""
Document ORM model.

Represents ingested source documents with processing status and metadata.
Tracks the ingestion lifecycle from insert to stored chunk embeddings.

Dependencies: sqlalchemy, chatbot_rag.boundary.db.base
System role: Document persistence for ingestion tracking
"""

import enum
from typing import Any

from sqlalchemy import JSON, Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from chatbot_rag.boundary.db.base import Base, IntIDMixin, TimestampMixin


class DocumentStatus(str, enum.Enum):
    """
    Document processing lifecycle states.

    PENDING: Document row inserted, awaiting processing
    PROCESSING: Chunking, embedding, and storing chunks
    COMPLETED: All chunks stored, ready for retrieval
    FAILED: Processing error; no chunks stored, error_message has details
    """

    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


class DocumentModel(Base, IntIDMixin, TimestampMixin):
    """
    Document ORM model tracking ingestion pipeline state.

    Lifecycle: insert (PENDING) → chunk/embed (PROCESSING) → chunks
    stored (COMPLETED) or failure (FAILED). A FAILED document keeps its
    content so it can be reingested.

    Attributes:
        id: Integer primary key
        chatbot_id: Owning chatbot (cascade delete)
        url: Source URL, if any
        content: Full extracted text
        content_type: Source kind (web_page, markdown, text, ...)
        document_metadata: Source-specific JSON (column "metadata")
        status: Processing state
        chunk_count: Number of chunks stored for the latest ingestion
        error_message: Null unless FAILED

    Relationships:
        chatbot: Parent ChatbotModel
        chunks: Stored ChunkModels (cascade delete)
    """

    __tablename__ = "documents"

    chatbot_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("chatbots.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    url: Mapped[str | None] = mapped_column(String(2048), nullable=True)

    content: Mapped[str] = mapped_column(Text, nullable=False)

    content_type: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        default="web_page",
    )

    document_metadata: Mapped[dict[str, Any]] = mapped_column(
        "metadata",
        JSON,
        nullable=False,
        default=dict,
    )

    status: Mapped[DocumentStatus] = mapped_column(
        Enum(DocumentStatus, native_enum=False),
        nullable=False,
        default=DocumentStatus.PENDING,
    )

    chunk_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    error_message: Mapped[str | None] = mapped_column(
        String(2048),
        nullable=True,
        doc="Error details if processing failed",
    )

    # Relationships
    chatbot = relationship("ChatbotModel", back_populates="documents")
    chunks = relationship(
        "ChunkModel",
        back_populates="document",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
