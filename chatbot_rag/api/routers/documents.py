"""
Document management API endpoints.

Routes:
- GET /chatbots/{chatbot_id}/documents - Knowledge base statistics
- DELETE /chatbots/{chatbot_id}/documents/{document_id} - Delete document and its chunks
- POST /chatbots/{chatbot_id}/documents/{document_id}/reingest - Rebuild a document's chunks

Dependencies: chatbot_rag.application.services
System role: Document management HTTP API
"""

from fastapi import APIRouter, Depends, status

from chatbot_rag.api.deps import get_document_service, get_ingestion_service
from chatbot_rag.api.routers.error_handling import handle_rag_errors, parse_chatbot_id
from chatbot_rag.api.routers.ingest import to_ingest_response
from chatbot_rag.application.services.document_service import DocumentService
from chatbot_rag.application.services.ingestion_service import IngestionService, IngestResult
from chatbot_rag.core.exceptions import ValidationError
from chatbot_rag.models.documents import DocumentResponse, DocumentStatisticsResponse
from chatbot_rag.models.ingest import IngestResponse

router = APIRouter(prefix="/chatbots", tags=["documents"])


def _parse_document_id(raw: str) -> int:
    try:
        document_id = int(raw)
    except ValueError as e:
        raise ValidationError("Invalid document ID", field="document_id") from e
    if document_id <= 0:
        raise ValidationError("Invalid document ID", field="document_id")
    return document_id


@router.get("/{chatbot_id}/documents", response_model=DocumentStatisticsResponse)
@handle_rag_errors
async def get_documents(
    chatbot_id: str,
    document_service: DocumentService = Depends(get_document_service),
) -> DocumentStatisticsResponse:
    """List a chatbot's documents with embedding counts and totals."""
    stats = await document_service.get_statistics(parse_chatbot_id(chatbot_id))
    return DocumentStatisticsResponse(
        documents=[
            DocumentResponse(
                id=summary.document.id,
                url=summary.document.url,
                content_type=summary.document.content_type,
                status=summary.document.status.value,
                error_message=summary.document.error_message,
                metadata=summary.document.document_metadata or {},
                embedding_count=summary.embedding_count,
                created_at=summary.document.created_at,
            )
            for summary in stats.documents
        ],
        total_documents=stats.total_documents,
        total_embeddings=stats.total_embeddings,
        content_types=stats.content_types,
        latest_document_at=stats.latest_document_at,
    )


@router.delete("/{chatbot_id}/documents/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
@handle_rag_errors
async def delete_document(
    chatbot_id: str,
    document_id: str,
    document_service: DocumentService = Depends(get_document_service),
) -> None:
    """
    Delete a document and all of its chunks.

    Raises:
        HTTPException(404): Document not found for this chatbot
    """
    await document_service.delete_document(
        parse_chatbot_id(chatbot_id), _parse_document_id(document_id)
    )


@router.post("/{chatbot_id}/documents/{document_id}/reingest", response_model=IngestResponse)
@handle_rag_errors
async def reingest_document(
    chatbot_id: str,
    document_id: str,
    ingestion_service: IngestionService = Depends(get_ingestion_service),
) -> IngestResponse:
    """Re-chunk and re-embed a document from its stored content."""
    document = await ingestion_service.reingest_document(
        parse_chatbot_id(chatbot_id), _parse_document_id(document_id)
    )
    return to_ingest_response(
        IngestResult(documents=[document]),
        message="Document re-ingested successfully",
    )
