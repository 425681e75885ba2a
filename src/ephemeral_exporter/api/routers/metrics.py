# src/ephemeral_exporter/api/routers/metrics.py
"""
Prometheus scrape endpoint.

The handler is a plain (sync) function, so FastAPI runs it on its worker
thread pool and concurrent scrapes never block the polling loop.
"""

from fastapi import APIRouter, Depends, Response
from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, generate_latest

from ephemeral_exporter.api.dependencies import get_registry


def scrape(registry: CollectorRegistry = Depends(get_registry)) -> Response:
    """Render every registered collector in the text exposition format."""
    return Response(content=generate_latest(registry), media_type=CONTENT_TYPE_LATEST)


def create_router(metrics_path: str = "/metrics") -> APIRouter:
    """Builds a router serving the scrape endpoint at the configured path."""
    router = APIRouter()
    router.add_api_route(metrics_path, scrape, methods=["GET"], include_in_schema=False)
    return router
