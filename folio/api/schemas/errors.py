"""
Error Response Schemas
======================

Pydantic models for consistent error responses.
"""

from typing import Any

from pydantic import Field

from folio.api.schemas.base import CamelModel


class ErrorResponse(CamelModel):
    """Standard error response body."""

    success: bool = False
    message: str = Field(..., description="Human-readable error message")
    code: str = Field(..., description="Machine-readable error code")
    request_id: str | None = Field(None, description="Request ID for correlation")
    details: dict[str, Any] | None = Field(None, description="Additional context")

    model_config = {
        "json_schema_extra": {
            "example": {
                "success": False,
                "message": "Folder not found",
                "code": "NOT_FOUND",
                "requestId": "5f0c7a52-9a55-4a8e-9d4b-1c2e0f3a6b7d",
                "details": {"resource": "Folder", "identifier": "3b1f..."},
            }
        }
    }
