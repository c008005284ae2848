"""
Test suite for health check endpoints.

System role: Verification of health HTTP API
"""

from unittest.mock import AsyncMock

from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from chatbot_rag.api.main import create_app
from chatbot_rag.boundary.db import get_async_db


def _client(session: AsyncMock) -> TestClient:
    app = create_app()

    async def override_db():
        yield session

    app.dependency_overrides[get_async_db] = override_db
    return TestClient(app)


class TestHealth:
    """GET /health and /health/db."""

    def test_health_should_report_healthy(self):
        response = _client(AsyncMock()).get("/api/v1/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "message": "Server Healthy"}

    def test_db_health_should_run_select_one(self):
        session = AsyncMock()

        response = _client(session).get("/api/v1/health/db")

        assert response.status_code == 200
        session.execute.assert_awaited_once()

    def test_db_failure_should_return_503(self):
        session = AsyncMock()
        session.execute.side_effect = OperationalError("SELECT 1", {}, Exception("down"))

        response = _client(session).get("/api/v1/health/db")

        assert response.status_code == 503
        assert response.json() == {"detail": "Database unavailable"}
