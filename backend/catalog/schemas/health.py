"""
Library Catalog — Health Check Schema
======================================
"""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """
    What:  Service health status with dependency checks.
    Who:   Returned by GET /health for Docker and load balancer probes.
    """
    status: str = Field(description="Overall status: healthy or unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connection: connected or disconnected")
    uptime_seconds: float = Field(description="Seconds since the service started")
