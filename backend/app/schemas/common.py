"""
PasteBin Backend - Shared Response Schemas
===========================================

What:  Response models shared by every router (errors, health, plain messages).
"""

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """
    Standardized error body for all API errors.

    Example:
        {"error": "Paste not found"}

    The request correlation ID travels in the X-Request-ID response header
    rather than in the body.
    """
    error: str = Field(description="Human-readable error description")


class MessageResponse(BaseModel):
    """Plain acknowledgement, e.g. {"message": "Paste deleted"}."""
    message: str = Field(description="Human-readable result message")


class HealthResponse(BaseModel):
    """
    What:  Health check response showing service and dependency status.
    Who:   Returned by GET /health for monitoring and load balancer health checks.
    """
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
