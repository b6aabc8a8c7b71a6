"""
Pydantic Schemas for API Request/Response Models

These schemas define the JSON structure for API endpoints.
"""
from datetime import datetime
from typing import Optional
from pydantic import AliasChoices, BaseModel, Field


class RegisterLookupRequest(BaseModel):
    """Register lookup body; the viewer has sent both ``parcelId`` and ``parcelid``."""
    parcel_id: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("parcelId", "parcelid", "parcel_id"),
    )


class ErrorResponse(BaseModel):
    """Structured failure body returned for every lookup error."""
    error: str
    message: str
    source: Optional[str] = None
    upstream_status: Optional[int] = None


class HealthCheck(BaseModel):
    """Health check response."""
    status: str
    version: str
    environment: str
    timestamp: datetime


# Every lookup endpoint shares one failure mapping, whichever upstream it calls
ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Missing or blank parcel id"},
    500: {"model": ErrorResponse, "description": "Upstream body could not be parsed"},
    502: {"model": ErrorResponse, "description": "TLS failure, upstream HTTP error or oversize response"},
    503: {"model": ErrorResponse, "description": "Could not connect to the upstream site"},
    504: {"model": ErrorResponse, "description": "Upstream request timed out"},
}
