"""
Document statistics schemas.

Dependencies: pydantic
System role: Document management API contracts
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class DocumentResponse(BaseModel):
    """Single document with its embedding count."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    url: str | None = None
    content_type: str = Field(alias="contentType")
    status: str
    error_message: str | None = Field(default=None, alias="errorMessage")
    metadata: dict[str, Any] = Field(default_factory=dict)
    embedding_count: int = Field(alias="embeddingCount")
    created_at: datetime = Field(alias="createdAt")


class DocumentStatisticsResponse(BaseModel):
    """Knowledge base summary for a chatbot."""

    model_config = ConfigDict(populate_by_name=True)

    documents: list[DocumentResponse]
    total_documents: int = Field(alias="totalDocuments")
    total_embeddings: int = Field(alias="totalEmbeddings")
    content_types: dict[str, int] = Field(alias="contentTypes")
    latest_document_at: datetime | None = Field(default=None, alias="latestDocumentAt")
