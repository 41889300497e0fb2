"""Tests for health endpoints."""

from fastapi.testclient import TestClient

from mailrelay.config import Settings, SmtpSettings
from mailrelay.main import create_app


def test_liveness(client: TestClient) -> None:
    """Test the liveness endpoint."""
    response = client.get("/health/live")
    assert response.status_code == 200
    assert response.json() == {"status": "alive"}


def test_readiness(client: TestClient) -> None:
    """Test the readiness endpoint."""
    response = client.get("/health/ready")
    assert response.status_code == 200
    assert response.json() == {
        "status": "ready",
        "environment": "testing",
        "smtp_configured": True,
    }


def test_readiness_without_smtp(app_settings: Settings) -> None:
    """Readiness reports missing SMTP configuration without failing."""
    with TestClient(create_app(app_settings, SmtpSettings())) as test_client:
        response = test_client.get("/health/ready")

    assert response.status_code == 200
    assert response.json()["smtp_configured"] is False


def test_unknown_route_uses_error_shape(client: TestClient) -> None:
    response = client.get("/api/Unknown")
    assert response.status_code == 404
    assert response.json() == {"error": "Not Found"}
    assert response.headers["access-control-allow-origin"] == "*"
