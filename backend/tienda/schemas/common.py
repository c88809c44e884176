"""
Tienda API: Shared Response Schemas
===================================

What:  Error envelope, root banner and health check response.
Why:   Every failure path renders the same envelope, so clients parse one
       shape regardless of which layer rejected the request.
"""

from typing import Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """
    Standardized error response format for all API errors.

    Fields:
        error:      Human-readable description (the driver message for
                    store errors)
        code:       Machine-readable error code ("validation_error", ...)
        details:    Structured context: field, constraint, resource
        request_id: Correlation ID for tracing this error in server logs

    Example:
        {
            "error": "Field 'nombre' is required",
            "code": "validation_error",
            "details": {"field": "nombre", "constraint": "required"},
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Human-readable error description")
    code: str = Field(description="Machine-readable error code")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class RootResponse(BaseModel):
    ok: bool = True
    mensaje: str


class HealthResponse(BaseModel):
    """Health check response showing service and store status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
