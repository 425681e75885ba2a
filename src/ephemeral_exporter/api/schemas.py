# src/ephemeral_exporter/api/schemas.py
"""
Pydantic response schemas for the API.
Keeps API-specific response shapes separate from internal domain models.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response schema for the health check endpoint."""

    status: str = Field(..., description="Health status of the exporter.")
    version: str = Field(..., description="Current application version.")
    node_name: str = Field(..., description="Node whose stats summary is polled.")
    running: bool = Field(..., description="Whether the polling loop is running.")
    pod_count: int = Field(0, description="Number of pods in the latest snapshot.")
    last_updated: Optional[datetime] = Field(None, description="When the latest snapshot was captured (UTC).")
    last_poll_failed: bool = Field(False, description="Whether the most recent poll cycle failed.")


class VersionResponse(BaseModel):
    """Response schema for the version endpoint."""

    version: str = Field(..., description="Current application version.")
