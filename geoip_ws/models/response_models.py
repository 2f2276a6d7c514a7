from typing import Any

from pydantic import BaseModel

from geoip_ws.models.request_models import Endpoint


class HealthResponse(BaseModel):
    """Response model for the health check endpoint."""

    status: str


class LookupResponse(BaseModel):
    """Response model for a GeoIP2 lookup."""

    endpoint: Endpoint
    ip: str | None = None
    result: dict[str, Any]
