"""
Shared response schemas
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str = Field(description="Human-readable result")

    model_config = ConfigDict(json_schema_extra={"example": {"message": "New note created"}})


class ErrorResponse(BaseModel):
    """Error body returned for 4xx/5xx answers."""

    message: str = Field(description="Human-readable error message")
    errors: Optional[list[dict[str, Any]]] = Field(
        default=None, description="Field errors for malformed requests"
    )

    model_config = ConfigDict(
        json_schema_extra={"example": {"message": "Duplicate note title"}}
    )


class HealthCheckResponse(BaseModel):
    """Store connectivity check."""

    connected: bool
    status: str
    response_time_ms: Optional[float] = None
    error: Optional[str] = None
