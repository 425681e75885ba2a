# src/ephemeral_exporter/api/dependencies.py
"""
FastAPI dependency injection functions.

The manager and registry are attached to the application state by
`create_app`; route handlers receive them through Depends() so tests
can override them.
"""

from fastapi import Request
from prometheus_client import CollectorRegistry

from ephemeral_exporter.core.manager import EphemeralStorageManager


def get_manager(request: Request) -> EphemeralStorageManager:
    """Provides the EphemeralStorageManager bound to the application."""
    return request.app.state.manager


def get_registry(request: Request) -> CollectorRegistry:
    """Provides the metrics registry bound to the application."""
    return request.app.state.registry
