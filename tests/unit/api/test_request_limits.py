"""Tests for API request size limits and the health endpoint."""

from fastapi.testclient import TestClient

from dex import __version__
from dex.api.main import app


class TestRequestSizeLimits:
    """Request body size limit."""

    def test_oversized_request_returns_413(self):
        """Request with Content-Length exceeding limit returns 413."""
        client = TestClient(app)
        response = client.post(
            "/accounts/alice/credit",
            json={"asset": "BTC", "amount": 1},
            headers={"Content-Length": str(20 * 1024 * 1024)},  # 20 MB
        )
        assert response.status_code == 413
        assert response.json()["detail"] == "Request too large"

    def test_normal_request_accepted(self):
        client = TestClient(app)
        response = client.post("/accounts/alice/credit", json={"asset": "BTC", "amount": 1})
        assert response.status_code == 200


class TestHealthEndpoint:
    """Health endpoint."""

    def test_health_returns_ok(self):
        client = TestClient(app)
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "version": __version__}
