"""
Source document schema.

Every extractor hands the ingestion service the same shape, regardless
of where the text came from.

Dependencies: pydantic
System role: Contract between source extractors and ingestion
"""

from typing import Any

from pydantic import BaseModel, Field

_CONTENT_TYPES = {
    "md": "markdown",
    "mdx": "markdown",
    "html": "web_page",
    "htm": "web_page",
    "pdf": "pdf",
}


def content_type_for_extension(extension: str) -> str:
    """Map a file extension to a document content type (default "text")."""
    return _CONTENT_TYPES.get(extension.lower().lstrip("."), "text")


class SourceDocument(BaseModel):
    """Extracted text ready for chunking."""

    url: str | None = Field(default=None, description="Where the content came from")
    content: str = Field(description="Extracted plain text")
    content_type: str = Field(default="web_page", description="Document content type")
    metadata: dict[str, Any] = Field(default_factory=dict, description="Source metadata")
