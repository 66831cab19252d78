"""Request Executor - authenticated GETs against the settings API.

Issues one GET per attempt with a bearer token for the chosen environment,
retrying with exponential backoff. HTTP-level failures never raise: every
outcome is folded into a RequestResult.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any

import httpx

from company_settings.core.config import Settings
from company_settings.core.environments import Environment, EnvironmentResolver, mask_token
from company_settings.core.retry import (
    DEFAULT_RETRY_CONFIG,
    RetryConfig,
    calculate_backoff_delay,
    should_retry,
)
from company_settings.schemas.request_result import RequestResult

logger = logging.getLogger(__name__)

STATUS_LABELS = {401: "Unauthorized", 403: "Forbidden"}


@dataclass(frozen=True)
class RequestOptions:
    """Per-call overrides for the executor."""

    headers: dict[str, str] = field(default_factory=dict)
    retry_config: RetryConfig | None = None


def auth_failure_message(status_code: int, environment: str) -> str:
    """Explicit message for a rejected credential."""
    return (
        f"Authentication failed ({status_code}) - token appears to be invalid or expired "
        f"for environment '{environment}'"
    )


def _status_error_message(status_code: int, environment: str) -> str:
    if status_code in STATUS_LABELS:
        return (
            f"{auth_failure_message(status_code, environment)}. "
            f"API returned status {status_code} ({STATUS_LABELS[status_code]})."
        )
    return f"API returned status {status_code}"


def _exception_status(exc: Exception) -> int | None:
    """Status code embedded in an httpx exception, if any."""
    response = getattr(exc, "response", None) if isinstance(exc, httpx.HTTPStatusError) else None
    return response.status_code if response is not None else None


class RequestExecutor:
    """Executes authenticated GET requests with bounded retries.

    The underlying httpx client is created lazily and reused across calls;
    calls do not share anything else. Two concurrent calls for the same URL
    each run their own full retry cycle.
    """

    def __init__(
        self,
        settings: Settings,
        resolver: EnvironmentResolver,
        client: httpx.AsyncClient | None = None,
        retry_config: RetryConfig = DEFAULT_RETRY_CONFIG,
    ):
        self._settings = settings
        self._resolver = resolver
        self._client = client
        self._client_lock = asyncio.Lock()
        self.retry_config = retry_config

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        async with self._client_lock:
            if self._client is None or self._client.is_closed:
                self._client = httpx.AsyncClient(timeout=self._settings.timeout_seconds)
            return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def execute(
        self,
        url: str,
        params: dict[str, Any] | None,
        environment: Environment | str,
        options: RequestOptions | None = None,
    ) -> RequestResult:
        """GET ``url`` with the credential of ``environment``.

        Returns on the first 200 response. Every other status, and every
        exception raised by the transport, is recorded as the current failure
        and retried until the attempt budget is spent.

        Raises:
            ConfigurationError: If the environment cannot be resolved. This
                happens before any request is attempted.
        """
        options = options or RequestOptions()
        retry_config = options.retry_config or self.retry_config
        env = Environment.parse(environment)
        target = self._resolver.resolve(env)
        token_preview = mask_token(target.token)
        params = params or {}

        logger.debug(f"Making request for environment: {env.value}")
        logger.debug(f"Selected base URL: {target.base_url}")
        logger.debug(f"Selected token (first 10 chars): {token_preview}")
        logger.info(f"GET {url} params={params} env={env.value}")

        headers = {"Authorization": f"Bearer {target.token}", **options.headers}
        failure_context = {
            "environment": env.value,
            "base_url": target.base_url,
            "token_preview": token_preview,
        }
        last_error: RequestResult | None = None

        for attempt in range(1, retry_config.max_attempts + 1):
            try:
                client = await self._get_client()
                response = await client.get(url, params=params, headers=headers)

                if response.status_code == 200:
                    return RequestResult.ok(body=response.text, status_code=response.status_code)

                last_error = RequestResult.failure(
                    _status_error_message(response.status_code, env.value),
                    status_code=response.status_code,
                    response_text=response.text,
                    **failure_context,
                )
            except httpx.HTTPError as e:
                status = _exception_status(e)
                if status in STATUS_LABELS:
                    message = f"{auth_failure_message(status, env.value)}: {e}"
                elif status is not None:
                    message = f"Request failed with status {status}: {e}"
                else:
                    message = f"Request failed: {type(e).__name__}: {e}"
                last_error = RequestResult.failure(
                    message, status_code=status, network_error=True, **failure_context
                )
            except Exception as e:
                last_error = RequestResult.failure(
                    f"Unexpected error for environment '{env.value}': {e}",
                    **failure_context,
                )

            logger.warning(
                f"Attempt {attempt}/{retry_config.max_attempts} for {url} failed: {last_error.error}",
                extra={"environment": env.value},
            )

            if should_retry(attempt, retry_config):
                delay = calculate_backoff_delay(attempt, retry_config)
                await asyncio.sleep(delay)

        return last_error or RequestResult.failure("Unknown error")
