# tests/api/test_health.py
"""Tests for the health and version endpoints."""

import asyncio

from ephemeral_exporter import __version__


class TestHealthEndpoint:
    """Tests for GET /health."""

    def test_health_returns_200(self, client):
        response = client.get("/health")
        assert response.status_code == 200

    def test_health_reports_stopped_manager(self, client):
        data = client.get("/health").json()

        assert data["status"] == "stopped"
        assert data["running"] is False
        assert data["node_name"] == "node-1"
        assert data["pod_count"] == 0
        assert data["last_updated"] is None
        assert data["version"] == __version__

    def test_health_reports_snapshot(self, client, manager, mock_collector, summary_payload):
        mock_collector.fetch.return_value = summary_payload
        asyncio.run(manager.poll_once())

        data = client.get("/health").json()

        assert data["pod_count"] == 2
        assert data["last_updated"] is not None
        assert data["last_poll_failed"] is False


class TestVersionEndpoint:
    def test_version(self, client):
        response = client.get("/version")

        assert response.status_code == 200
        assert response.json() == {"version": __version__}
