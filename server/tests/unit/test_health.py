"""Unit tests for health endpoints."""

import pytest

from mi3ad.core.config import settings
from mi3ad.routers import health
from mi3ad.schemas.health import HealthStatus


@pytest.mark.asyncio
async def test_health_ping_rpc(test_client):
    """Test the RPC-style health ping endpoint."""
    response = await test_client.post("/v1/health/ping", json={})
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["service"] == "mi3ad-api"
    assert data["version"] == "1.0.0"
    assert "timestamp" in data
    assert set(data["workers"]) == {"notifications", "school_replies", "incoming_messages", "session_lock"}


@pytest.mark.asyncio
async def test_health_ping_reports_stopped_worker(test_client, monkeypatch):
    monkeypatch.setattr(settings, "workers_enabled", True)
    monkeypatch.setattr(health.worker_manager, "get_worker_status", lambda: {
        "notifications": True,
        "school_replies": False,
    })

    response = await test_client.post("/v1/health/ping", json={})

    data = response.json()
    assert data["status"] == "degraded"
    assert data["workers"]["school_replies"] is False


def test_overall_status(monkeypatch):
    monkeypatch.setattr(settings, "workers_enabled", True)
    assert health.overall_status({"a": True, "b": True}) == HealthStatus.HEALTHY
    assert health.overall_status({"a": False, "b": False}) == HealthStatus.HEALTHY
    assert health.overall_status({"a": True, "b": False}) == HealthStatus.DEGRADED

    monkeypatch.setattr(settings, "workers_enabled", False)
    assert health.overall_status({"a": True, "b": False}) == HealthStatus.HEALTHY


@pytest.mark.asyncio
async def test_unknown_route(test_client):
    response = await test_client.post("/v1/nothing/here", json={})
    assert response.status_code == 404
