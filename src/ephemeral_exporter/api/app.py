# src/ephemeral_exporter/api/app.py
"""
FastAPI application factory for the exporter.

Uses the factory pattern so the app can be created with or without
lifespan management (e.g., tests drive the manager themselves).
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from prometheus_client import CollectorRegistry

from ephemeral_exporter import __version__
from ephemeral_exporter.api.routers import health, metrics
from ephemeral_exporter.core.manager import EphemeralStorageManager
from ephemeral_exporter.exporters.prometheus_exporter import EphemeralStorageCollector

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Start the polling loop with the server and stop it on shutdown."""
    manager: EphemeralStorageManager = app.state.manager
    logger.info("Starting ephemeral-storage-exporter...")
    await manager.start()
    try:
        yield
    finally:
        logger.info("Shutting down ephemeral-storage-exporter...")
        await manager.stop()


def create_app(
    manager: EphemeralStorageManager,
    metrics_path: str = "/metrics",
    use_lifespan: bool = False,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        manager: The stats manager whose snapshot is served.
        metrics_path: Path of the Prometheus scrape endpoint.
        use_lifespan: If True, start and stop the manager with the
                      application. Set to False for testing.

    Returns:
        A configured FastAPI application instance.
    """
    app = FastAPI(
        title="Ephemeral Storage Exporter",
        description="Exposes per-pod ephemeral storage usage of a Kubernetes node as Prometheus metrics.",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        lifespan=lifespan if use_lifespan else None,
    )

    registry = CollectorRegistry()
    registry.register(EphemeralStorageCollector(manager))
    app.state.manager = manager
    app.state.registry = registry

    app.include_router(metrics.create_router(metrics_path), tags=["Metrics"])
    app.include_router(health.router, tags=["Health"])

    return app
