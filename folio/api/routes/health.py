"""
Health Check Endpoints
======================

Liveness probe for the API. Does NOT require authentication.
"""

from datetime import UTC, datetime

from fastapi import APIRouter
from pydantic import BaseModel

from folio.api.config import settings

router = APIRouter(prefix="/health", tags=["health"])


class LivenessResponse(BaseModel):
    """Liveness probe response."""

    status: str
    timestamp: str
    version: str


@router.get("", response_model=LivenessResponse)
async def liveness():
    """Process is up and serving requests."""
    return LivenessResponse(
        status="healthy",
        timestamp=datetime.now(UTC).isoformat(),
        version=settings.app_version,
    )
