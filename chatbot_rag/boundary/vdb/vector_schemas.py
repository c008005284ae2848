"""
Vector database schemas.

Pydantic models for vector operations (writes, ranked hits, hydrated results).
Used for type-safe vector store interactions.

Dependencies: pydantic
System role: Type definitions for vector operations
"""

from typing import Any

from pydantic import BaseModel, Field


class ChunkRecord(BaseModel):
    """One chunk to be written with its embedding."""

    content: str = Field(description="Chunk text")
    embedding: list[float] = Field(description="Chunk embedding vector")
    chunk_index: int = Field(default=0, description="Position within the document")
    metadata: dict[str, Any] = Field(default_factory=dict, description="Chunk metadata")


class VectorSearchResult(BaseModel):
    """Single ranked hit from vector search, before hydration."""

    chunk_id: int = Field(description="Chunk primary key")
    document_id: int = Field(description="Parent document id")
    content: str = Field(description="Chunk text content")
    distance: float = Field(description="Cosine distance (lower is more similar)")


class SimilarChunk(BaseModel):
    """Hit hydrated with its parent document."""

    chunk_id: int
    document_id: int
    content: str
    distance: float
    similarity: float = Field(description="1 - cosine distance")
    document_url: str | None = None
    content_type: str | None = None
