"""
Ingestion models and schemas.

Dependencies: pydantic
System role: Ingestion API contracts
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class IngestRequest(BaseModel):
    """
    Request schema for document ingestion.

    sourceType "github" needs githubRepo, "website" needs url; otherwise
    content is ingested as a single document.
    """

    model_config = ConfigDict(populate_by_name=True)

    content: str | None = Field(default=None, description="Raw text to ingest")
    url: str | None = Field(default=None, description="Source URL or website to crawl")
    content_type: str | None = Field(default=None, alias="contentType")
    metadata: dict[str, Any] | None = Field(default=None)
    source_type: Literal["github", "website"] | None = Field(default=None, alias="sourceType")
    github_repo: str | None = Field(default=None, alias="githubRepo", description="owner/repo")


class IngestedDocumentResponse(BaseModel):
    """One ingested document."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    url: str | None = None
    content_type: str = Field(alias="contentType")
    chunk_count: int = Field(alias="chunkCount")
    status: str


class IngestResponse(BaseModel):
    """Response schema for ingestion."""

    model_config = ConfigDict(populate_by_name=True)

    message: str = "Documents ingested successfully"
    documents: list[IngestedDocumentResponse]
    total_documents: int = Field(alias="totalDocuments")
    total_embeddings: int = Field(alias="totalEmbeddings")
