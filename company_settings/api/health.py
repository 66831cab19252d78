"""Health check endpoint.

Reports process liveness only; it does not call the upstream settings API.
Use the verify_environment_tokens tool to check upstream reachability.
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from company_settings.api.dependencies import get_settings
from company_settings.core.config import Settings

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    service: str
    version: str
    default_environment: str


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: Settings = Depends(get_settings)) -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(
        status="healthy",
        service=settings.app_name,
        version=settings.app_version,
        default_environment=settings.default_environment,
    )
