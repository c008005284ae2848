"""
Test suite for document management API endpoints.

System role: Verification of document HTTP API
"""

from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from chatbot_rag.api.deps import get_document_service, get_ingestion_service
from chatbot_rag.api.main import create_app
from chatbot_rag.application.services.document_service import DocumentStatistics, DocumentSummary
from chatbot_rag.application.services.ingestion_service import IngestedDocument
from chatbot_rag.boundary.db.models.document_model import DocumentStatus
from chatbot_rag.core.exceptions import DocumentNotFoundError

CREATED = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def mock_document_service() -> AsyncMock:
    service = AsyncMock()
    document = SimpleNamespace(
        id=5,
        url="https://docs.example.com",
        content_type="web_page",
        status=DocumentStatus.FAILED,
        error_message="Embedding failed for all providers",
        document_metadata={"source": "website"},
        created_at=CREATED,
    )
    service.get_statistics.return_value = DocumentStatistics(
        documents=[DocumentSummary(document=document, embedding_count=0)],
        content_types={"web_page": 1},
        latest_document_at=CREATED,
    )
    return service


@pytest.fixture
def mock_ingestion_service() -> AsyncMock:
    service = AsyncMock()
    service.reingest_document.return_value = IngestedDocument(
        id=5, url="https://docs.example.com", content_type="web_page",
        chunk_count=4, status=DocumentStatus.COMPLETED,
    )
    return service


@pytest.fixture
def client(mock_document_service, mock_ingestion_service) -> TestClient:
    app = create_app()
    app.dependency_overrides[get_document_service] = lambda: mock_document_service
    app.dependency_overrides[get_ingestion_service] = lambda: mock_ingestion_service
    return TestClient(app)


class TestDocumentStatistics:
    """GET /chatbots/{id}/documents."""

    def test_statistics_should_use_camel_case(self, client):
        response = client.get("/api/v1/chatbots/2/documents")

        assert response.status_code == 200
        body = response.json()
        assert body["totalDocuments"] == 1
        assert body["totalEmbeddings"] == 0
        assert body["contentTypes"] == {"web_page": 1}
        assert body["latestDocumentAt"] is not None
        document = body["documents"][0]
        assert document["status"] == "failed"
        assert document["errorMessage"] == "Embedding failed for all providers"
        assert document["embeddingCount"] == 0
        assert document["metadata"] == {"source": "website"}


class TestDeleteDocument:
    """DELETE /chatbots/{id}/documents/{documentId}."""

    def test_delete_should_return_204(self, client, mock_document_service):
        response = client.delete("/api/v1/chatbots/2/documents/5")

        assert response.status_code == 204
        mock_document_service.delete_document.assert_awaited_once_with(2, 5)

    def test_missing_document_should_return_404(self, client, mock_document_service):
        mock_document_service.delete_document.side_effect = DocumentNotFoundError(5, 2)

        response = client.delete("/api/v1/chatbots/2/documents/5")

        assert response.status_code == 404
        assert response.json() == {"detail": "Document not found"}

    def test_invalid_document_id_should_return_400(self, client):
        response = client.delete("/api/v1/chatbots/2/documents/latest")

        assert response.status_code == 400
        assert response.json() == {"detail": "Invalid document ID"}


class TestReingestDocument:
    """POST /chatbots/{id}/documents/{documentId}/reingest."""

    def test_reingest_should_report_new_chunk_count(self, client, mock_ingestion_service):
        response = client.post("/api/v1/chatbots/2/documents/5/reingest")

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Document re-ingested successfully"
        assert body["totalEmbeddings"] == 4
        assert body["documents"][0]["status"] == "completed"
        mock_ingestion_service.reingest_document.assert_awaited_once_with(2, 5)
