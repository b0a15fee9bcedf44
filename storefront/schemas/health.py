"""Health check payload."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthStatus(BaseModel):
    """Liveness plus database reachability; 'degraded' when the database is down."""

    status: Literal["ok", "degraded"] = "ok"
    environment: str = Field(description="Current app environment (dev or prod)")
    database: Literal["connected", "disconnected"]
