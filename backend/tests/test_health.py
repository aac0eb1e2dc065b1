"""
Library Catalog — Health Check Tests
=====================================

The test settings point DATABASE_URL at a temporary SQLite file, so the
probe has a real database to reach.
"""

from unittest.mock import patch

import pytest


@pytest.mark.asyncio
async def test_health_reports_connected_database(test_client):
    response = await test_client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["database"] == "connected"
    assert body["uptime_seconds"] >= 0


@pytest.mark.asyncio
async def test_health_reports_unreachable_database(test_client):
    with patch("catalog.routes.health.engine") as mock_engine:
        mock_engine.connect.side_effect = OSError("connection refused")
        response = await test_client.get("/health")

    assert response.status_code == 503
    assert response.json()["database"] == "disconnected"
