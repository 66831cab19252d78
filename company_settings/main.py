"""Company Settings MCP Server - FastAPI Application Factory.

This module is the composition root: it loads the configuration once and
hands it, by parameter, to every component that needs it.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from company_settings.api.router import api_router
from company_settings.core import Environment, EnvironmentResolver, Settings, load_settings
from company_settings.core.logging import get_logger, setup_logging
from company_settings.services.company_settings import CompanySettingsService
from company_settings.services.request_executor import RequestExecutor
from company_settings.services.token_verifier import TokenVerifier

logger = get_logger("main")


async def _validate_default_token(verifier: TokenVerifier, environment: Environment) -> None:
    """Abort startup if the default environment rejects its token.

    An unreachable endpoint only produces a warning.
    """
    logger.info(f"Validating API token for default environment '{environment.value}'")
    status = await verifier.verify_environment(environment)

    if not status.valid:
        logger.error(f"STARTUP FATAL: {status.error}")
        logger.error(
            "Check TP_SETTINGS_TOKEN_PD, TP_SETTINGS_TOKEN_IN, TP_SETTINGS_TOKEN_AC "
            "(or the single legacy TP_SETTINGS_TOKEN)"
        )
        raise SystemExit("Startup aborted: token validation failed.")
    if status.error:
        logger.warning(f"Could not validate token: {status.error}. Proceeding anyway.")
    else:
        logger.info("Token validation successful")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    settings: Settings = app.state.settings
    logger.info(
        f"Starting {settings.app_name} v{settings.app_version} "
        f"(default environment: {settings.default_environment})"
    )

    if settings.verify_on_startup:
        await _validate_default_token(
            app.state.token_verifier,
            app.state.resolver.default_environment,
        )

    yield

    logger.info("Shutting down...")
    await app.state.request_executor.close()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Raises:
        ConfigurationError: If settings are not given and the environment
            does not hold a valid configuration.
    """
    settings = settings or load_settings()
    setup_logging(level=settings.log_level, format_type=settings.log_format)

    resolver = EnvironmentResolver(settings)
    executor = RequestExecutor(settings, resolver)
    verifier = TokenVerifier(resolver, executor)
    service = CompanySettingsService(resolver, executor, verifier)

    app = FastAPI(
        title=settings.app_name,
        description="MCP server for reading company settings",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    app.state.settings = settings
    app.state.resolver = resolver
    app.state.request_executor = executor
    app.state.token_verifier = verifier
    app.state.settings_service = service

    app.include_router(api_router)

    return app
