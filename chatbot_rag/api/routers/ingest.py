"""Ingestion API endpoints.

Routes:
- POST /chatbots/{chatbot_id}/ingest - Ingest manual content, a GitHub repository, or a website

Dependencies: chatbot_rag.application.services.ingestion_service
System role: Knowledge base ingestion HTTP API
"""

from fastapi import APIRouter, Depends

from chatbot_rag.api.deps import get_ingestion_service
from chatbot_rag.api.routers.error_handling import handle_rag_errors, parse_chatbot_id
from chatbot_rag.application.services.ingestion_service import IngestionService, IngestResult
from chatbot_rag.models.ingest import IngestedDocumentResponse, IngestRequest, IngestResponse

router = APIRouter(prefix="/chatbots", tags=["ingest"])


def to_ingest_response(
    result: IngestResult,
    message: str = "Documents ingested successfully",
) -> IngestResponse:
    return IngestResponse(
        message=message,
        documents=[
            IngestedDocumentResponse(
                id=document.id,
                url=document.url,
                content_type=document.content_type,
                chunk_count=document.chunk_count,
                status=document.status.value,
            )
            for document in result.documents
        ],
        total_documents=result.total_documents,
        total_embeddings=result.total_embeddings,
    )


@router.post("/{chatbot_id}/ingest", response_model=IngestResponse)
@handle_rag_errors
async def ingest(
    chatbot_id: str,
    request: IngestRequest,
    ingestion_service: IngestionService = Depends(get_ingestion_service),
) -> IngestResponse:
    """
    Ingest documents into a chatbot's knowledge base.

    Documents are processed one at a time; a failing document is marked
    failed and the request errors, while documents completed before it stay.

    Raises:
        HTTPException(400): Nothing to ingest or bad repository format
        HTTPException(404): Chatbot not found
        HTTPException(429/401/504/500): Embedding provider failures
    """
    result = await ingestion_service.ingest(parse_chatbot_id(chatbot_id), request)
    return to_ingest_response(result)
