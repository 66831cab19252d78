"""Company Settings API Router - aggregates all routes."""

from fastapi import APIRouter

from company_settings.api import health, mcp_gateway

api_router = APIRouter()

api_router.include_router(health.router)
api_router.include_router(mcp_gateway.router)
