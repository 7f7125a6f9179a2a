"""
Standardized API response models.
Documents the error envelope and the service-level endpoints.
"""

from typing import Optional, Any
from pydantic import BaseModel, Field
from datetime import datetime

from app.security import utcnow


class ErrorDetail(BaseModel):
    """Detailed error information"""

    code: str = Field(..., description="Error code")
    message: str = Field(..., description="Error message")
    details: Optional[Any] = Field(None, description="Additional error details")


class ErrorResponse(BaseModel):
    """Standardized error response"""

    success: bool = Field(False, description="Always false for errors")
    error: ErrorDetail = Field(..., description="Error details")
    timestamp: datetime = Field(default_factory=utcnow, description="Error timestamp")


class ApiInfoResponse(BaseModel):
    message: str


class HealthResponse(BaseModel):
    """Health check response"""

    status: str = Field(..., description="Service status")
    service: str = Field(..., description="Service name")
    version: Optional[str] = Field(None, description="Service version")
    time: datetime = Field(default_factory=utcnow, description="Check timestamp")


# Attached to every authenticated router for the OpenAPI schema
AUTH_ERROR_RESPONSES = {
    401: {"model": ErrorResponse, "description": "Missing or invalid bearer token"},
}
