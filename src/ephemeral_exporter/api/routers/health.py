# src/ephemeral_exporter/api/routers/health.py
"""
API routes for liveness and version information.
"""

from fastapi import APIRouter, Depends

from ephemeral_exporter import __version__
from ephemeral_exporter.api.dependencies import get_manager
from ephemeral_exporter.api.schemas import HealthResponse, VersionResponse
from ephemeral_exporter.core.manager import EphemeralStorageManager

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
def health(manager: EphemeralStorageManager = Depends(get_manager)):
    """Health check endpoint. Never waits on the cluster."""
    snapshot = manager.snapshot
    return HealthResponse(
        status="ok" if manager.running else "stopped",
        version=__version__,
        node_name=manager.node_name,
        running=manager.running,
        pod_count=len(snapshot),
        last_updated=snapshot.captured_at,
        last_poll_failed=manager.last_poll_failed,
    )


@router.get("/version", response_model=VersionResponse)
async def version():
    """Return the current application version."""
    return VersionResponse(version=__version__)
