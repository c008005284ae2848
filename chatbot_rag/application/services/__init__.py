"""Service orchestrators."""

from .chat_service import ChatResult, ChatService
from .document_service import DocumentService, DocumentStatistics
from .ingestion_service import IngestedDocument, IngestionService, IngestResult
from .retrieval_service import RetrievalService

__all__ = [
    "ChatResult",
    "ChatService",
    "DocumentService",
    "DocumentStatistics",
    "IngestedDocument",
    "IngestionService",
    "IngestResult",
    "RetrievalService",
]
