"""Schemas for the health ping."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class HealthStatus(str, Enum):
    """Overall service status."""
    HEALTHY = "healthy"
    DEGRADED = "degraded"


class HealthResponse(BaseModel):
    """Health ping response, including the simulation workers."""

    status: HealthStatus = Field(..., description="Service status")
    service: str = Field(..., description="Service name")
    timestamp: datetime = Field(..., description="Current server time (ISO 8601)")
    version: str = Field("1.0.0", description="API version")
    workers_enabled: bool = Field(..., description="Whether simulation workers start with the app")
    workers: dict[str, bool] = Field(
        default_factory=dict,
        description="Worker name to whether it is running"
    )
