"""Unit tests for the root and status endpoints."""

from fastapi.testclient import TestClient

from common.config import Settings


class TestRootEndpoint:
    """Tests for GET /."""

    def test_root_returns_welcome(self, client: TestClient) -> None:
        response = client.get("/")
        assert response.status_code == 200
        data = response.json()
        assert data["message"]
        assert data["version"] == "1.0.0"
        assert data["environment"] == "production"


class TestStatusEndpoint:
    """Tests for GET /api/status."""

    def test_status_running(self, client: TestClient) -> None:
        response = client.get("/api/status")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "running"
        assert data["environment"] == "production"

    def test_status_reports_port(self, client: TestClient) -> None:
        data = client.get("/api/status").json()
        assert data["port"] == "3000"

    def test_status_reports_configured_port(self) -> None:
        from api.main import create_app

        app = create_app(Settings(_env_file=None, port=8080, environment="staging"))
        with TestClient(app) as client:
            data = client.get("/api/status").json()
        assert data["port"] == "8080"
        assert data["environment"] == "staging"


class TestHeadRequests:
    def test_head_on_root(self, client: TestClient) -> None:
        assert client.head("/").status_code == 200

    def test_head_on_status(self, client: TestClient) -> None:
        assert client.head("/api/status").status_code == 200
