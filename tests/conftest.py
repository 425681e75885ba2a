# tests/conftest.py

import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from ephemeral_exporter.collectors.base_collector import BaseCollector


@pytest.fixture(autouse=True)
def mock_settings_env_vars(monkeypatch):
    """
    Pytest fixture to mock environment variables for the config module.

    This fixture runs automatically for every test (`autouse=True`) so the
    exporter's config is predictable and isolated from the actual environment.
    """
    monkeypatch.setenv("CURRENT_NODE_NAME", "node-1")
    monkeypatch.setenv("SCRAPE_INTERVAL_SECOND", "15")
    for key in ("FETCH_TIMEOUT_SECOND", "LISTEN_ADDRESS", "METRICS_PATH", "LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)


def make_summary(pods, node_name="node-1") -> bytes:
    """Builds a kubelet stats summary payload."""
    return json.dumps({"node": {"nodeName": node_name}, "pods": pods}).encode()


def make_pod(name, namespace="default", used=None, available=None, capacity=None):
    """Builds one pod entry; byte fields left as None are omitted like the kubelet does."""
    fs = {"time": "2024-05-01T10:00:00Z"}
    for key, value in (("usedBytes", used), ("availableBytes", available), ("capacityBytes", capacity)):
        if value is not None:
            fs[key] = value
    return {
        "podRef": {"name": name, "namespace": namespace, "uid": f"uid-{name}"},
        "startTime": "2024-05-01T09:00:00Z",
        "ephemeral-storage": fs,
    }


@pytest.fixture
def summary_payload() -> bytes:
    """Two pods: pod-a reports everything, pod-b has no availableBytes yet."""
    return make_summary(
        [
            make_pod("pod-a", used=100, available=200, capacity=300),
            make_pod("pod-b", namespace="kube-system", used=50, capacity=300),
        ]
    )


@pytest.fixture
def mock_collector():
    """Returns a mock stats collector whose fetch() is an AsyncMock."""
    collector = MagicMock(spec=BaseCollector)
    collector.fetch = AsyncMock()
    collector.close = AsyncMock()
    return collector


@pytest.fixture
def pod_entry():
    """Factory fixture exposing make_pod to tests."""
    return make_pod


@pytest.fixture
def summary_factory():
    """Factory fixture exposing make_summary to tests."""
    return make_summary
