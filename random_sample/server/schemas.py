"""Pydantic models for API responses."""

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    host_url: str
    host_reachable: bool
    plugin_store: str
