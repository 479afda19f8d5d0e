"""Unit tests for health endpoint."""

from datetime import datetime

from fastapi.testclient import TestClient


def test_health_check_returns_200(client: TestClient) -> None:
    """Health endpoint should return 200 OK."""
    response = client.get("/health")
    assert response.status_code == 200


def test_health_check_answers_head(client: TestClient) -> None:
    """HEAD probes get the same status as GET."""
    response = client.head("/health")
    assert response.status_code == 200


def test_health_check_returns_ok_status(client: TestClient) -> None:
    """Health endpoint should return OK status."""
    data = client.get("/health").json()
    assert data["status"] == "OK"


def test_health_check_timestamp_is_parseable(client: TestClient) -> None:
    """Timestamp should be ISO-8601 UTC."""
    data = client.get("/health").json()
    parsed = datetime.fromisoformat(data["timestamp"].replace("Z", "+00:00"))
    assert parsed.utcoffset().total_seconds() == 0


def test_health_check_reports_environment_and_uptime(client: TestClient) -> None:
    data = client.get("/health").json()
    assert data["environment"] == "production"
    assert isinstance(data["uptime"], float)
    assert data["uptime"] >= 0


def test_health_check_uptime_grows(client: TestClient) -> None:
    first = client.get("/health").json()["uptime"]
    second = client.get("/health").json()["uptime"]
    assert second >= first


def test_health_check_unaffected_by_failing_routes(test_settings) -> None:
    """A broken route elsewhere must not change /health."""
    from api.main import create_app

    app = create_app(test_settings)

    async def broken() -> None:
        raise RuntimeError("boom")

    app.add_api_route("/broken", broken)

    with TestClient(app, raise_server_exceptions=False) as client:
        assert client.get("/broken").status_code == 500
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "OK"
