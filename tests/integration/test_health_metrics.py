"""Integration tests for /health, /healthz and /metrics endpoints."""

from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from planner.app.main import app


@pytest.fixture
def client() -> TestClient:
    """Create test client."""
    return TestClient(app)


class TestHealthEndpoint:
    """Test health endpoints."""

    def test_health_always_ok(self, client: TestClient) -> None:
        """Test /health is a plain liveness probe."""
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_healthz_without_database(self, client: TestClient) -> None:
        """Test /healthz reports the in-memory store as not configured."""
        response = client.get("/healthz")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["components"]["db"] == "not_configured"

    @patch("planner.app.api.routes.health.check_db")
    def test_healthz_returns_503_when_db_fails(
        self, mock_check_db: MagicMock, client: TestClient
    ) -> None:
        """Test /healthz returns 503 when the booking database is unreachable."""
        mock_check_db.return_value = (False, "error: OperationalError")

        response = client.get("/healthz")

        assert response.status_code == 503
        data = response.json()
        assert data["status"] == "degraded"
        assert data["components"]["db"] == "error: OperationalError"

    def test_root(self, client: TestClient) -> None:
        """Test the root endpoint."""
        assert client.get("/").json()["message"] == "Itinerary Planner API"


class TestMetricsEndpoint:
    """Test /metrics endpoint."""

    def test_metrics_exposes_planner_counters(self, client: TestClient) -> None:
        """Test wizard activity shows up in the Prometheus exposition."""
        session_id = client.post("/itineraries", json={"start_date": "2025-06-10"}).json()[
            "session_id"
        ]
        client.post(f"/itineraries/{session_id}/advance")

        response = client.get("/metrics")

        assert response.status_code == 200
        assert "text/plain" in response.headers["content-type"]
        assert "planner_wizard_transitions_total" in response.text
        assert 'action="advance"' in response.text
