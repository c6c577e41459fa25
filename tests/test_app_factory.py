"""Tests for the app factory."""

from unittest.mock import MagicMock

from fastapi.testclient import TestClient

from islandbook.api.factory import create_app
from islandbook.observability.correlation import CORRELATION_ID_HEADER


class TestHealth:
    def test_health_available(self, service):
        client = TestClient(create_app(service))
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {
            "status": "ok",
            "policy": {"minDaysAhead": 1, "maxConsecutiveDays": 3, "maxDaysAhead": 30},
        }


class TestPolicyFromEnvironment:
    def test_builds_service_from_env(self, monkeypatch):
        monkeypatch.setenv("ISLAND_MIN_DAYS_AHEAD", "2")
        monkeypatch.setenv("ISLAND_MAX_CONSECUTIVE_DAYS", "7")
        monkeypatch.setenv("ISLAND_MAX_DAYS_AHEAD", "60")

        app = create_app()

        policy = app.state.booking_service.policy
        assert (policy.min_days_ahead, policy.max_consecutive_days, policy.max_days_ahead) == (2, 7, 60)


class TestCorrelationId:
    def test_generates_correlation_id(self, service):
        client = TestClient(create_app(service))
        response = client.get("/health")
        assert response.headers.get(CORRELATION_ID_HEADER)

    def test_echoes_incoming_correlation_id(self, service):
        client = TestClient(create_app(service))
        response = client.get("/health", headers={CORRELATION_ID_HEADER: "abc-123"})
        assert response.headers[CORRELATION_ID_HEADER] == "abc-123"


class TestUnhandledErrors:
    def test_unexpected_exception_is_503(self, policy):
        service = MagicMock(policy=policy)
        service.get_vacancy.side_effect = ValueError("boom")
        client = TestClient(create_app(service), raise_server_exceptions=False)

        response = client.get("/vacancy")

        assert response.status_code == 503
