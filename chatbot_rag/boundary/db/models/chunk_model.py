"""
Chunk ORM model.

Stores one embedded chunk of a document. On PostgreSQL the embedding is
a pgvector VECTOR(768); other dialects store it as a JSON array.

Dependencies: sqlalchemy, pgvector, chatbot_rag.boundary.db.base
System role: Vector-bearing chunk persistence
"""

from datetime import datetime
from typing import Any

from pgvector.sqlalchemy import Vector
from sqlalchemy import JSON, DateTime, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from chatbot_rag.boundary.db.base import Base, IntIDMixin, utcnow

EMBEDDING_DIMENSION = 768


class ChunkModel(Base, IntIDMixin):
    """
    Chunk ORM model.

    Attributes:
        id: Integer primary key (insertion order)
        document_id: Parent document (cascade delete)
        chunk_index: Position of the chunk within its document
        content: Chunk text
        embedding: 768-dim vector
        chunk_metadata: JSON (column "metadata")
        created_at: Insert timestamp (UTC)
    """

    __tablename__ = "chunks"

    document_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("documents.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    chunk_index: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    content: Mapped[str] = mapped_column(Text, nullable=False)

    embedding: Mapped[list[float]] = mapped_column(
        Vector(EMBEDDING_DIMENSION).with_variant(JSON(), "sqlite"),
        nullable=False,
    )

    chunk_metadata: Mapped[dict[str, Any]] = mapped_column(
        "metadata",
        JSON,
        nullable=False,
        default=dict,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )

    document = relationship("DocumentModel", back_populates="chunks")
