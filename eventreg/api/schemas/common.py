"""
Common API Schemas

Shared Pydantic models used across all API routers.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class ErrorResponse(BaseModel):
    """
    Standard error response model for all API errors.

    Attributes:
        code: Machine-readable error code (e.g., "EXPORT_NOT_FOUND")
        message: Human-readable error message
        details: Optional additional error details
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "code": "EXPORT_NOT_FOUND",
                "message": "Export 7c0e... not found, not finished or expired",
                "details": {"export_id": "7c0e2a4e-3b0c-4f7e-9d55-0d3c0f1a2b3c"},
            }
        }
    )

    code: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error message")
    details: Optional[Dict[str, Any]] = Field(
        default=None, description="Additional error context"
    )
