"""FastAPI dependencies resolving components built by the composition root."""

from fastapi import Request

from company_settings.core.config import Settings
from company_settings.services.company_settings import CompanySettingsService


def get_settings(request: Request) -> Settings:
    """Settings loaded once at startup."""
    return request.app.state.settings


def get_settings_service(request: Request) -> CompanySettingsService:
    """The company settings service shared by all requests."""
    return request.app.state.settings_service
