"""Token Verifier - probes each environment to classify its credential.

A rejected credential (401/403) is classified as invalid, and so is a probe
that failed for a reason other than the transport. An endpoint that cannot be
reached, or answers with a 5xx, says nothing about the credential, so it is
reported as valid with a note.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any

from company_settings.core.environments import Environment, EnvironmentResolver
from company_settings.core.retry import PROBE_RETRY_CONFIG
from company_settings.services.request_executor import (
    RequestExecutor,
    RequestOptions,
    auth_failure_message,
)

logger = logging.getLogger(__name__)

# Known-safe read used as the probe target
PROBE_PATH = "/setting/company/1"


@dataclass
class TokenStatus:
    """Verdict for one environment's credential."""

    valid: bool
    error: str | None = None
    status_code: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return {k: v for k, v in asdict(self).items() if v is not None}


class TokenVerifier:
    """Classifies the credential of each environment with one probe request."""

    def __init__(self, resolver: EnvironmentResolver, executor: RequestExecutor):
        self._resolver = resolver
        self._executor = executor

    async def verify_environment(self, environment: Environment | str) -> TokenStatus:
        """Probe one environment."""
        env = Environment.parse(environment)
        target = self._resolver.resolve(env)
        url = f"{target.base_url}{PROBE_PATH}"

        logger.info(f"Testing token for environment: {env.value}")
        result = await self._executor.execute(
            url,
            {},
            env,
            RequestOptions(retry_config=PROBE_RETRY_CONFIG),
        )

        if result.success:
            return TokenStatus(valid=True, status_code=result.status_code)
        if result.is_auth_failure:
            return TokenStatus(
                valid=False,
                error=auth_failure_message(result.status_code, env.value),
                status_code=result.status_code,
            )
        if result.status_code is None:
            if result.network_error:
                # Unreachable endpoint: not evidence of a bad credential
                return TokenStatus(valid=True, error=f"Network error: {result.error}")
            return TokenStatus(
                valid=False,
                error=f"Unexpected error testing environment '{env.value}': {result.error}",
            )
        if result.status_code >= 500:
            # Endpoint unhealthy; the credential itself was not rejected
            return TokenStatus(
                valid=True,
                error=f"Network error ({result.status_code}): {result.error}",
                status_code=result.status_code,
            )
        return TokenStatus(valid=True, status_code=result.status_code)

    async def verify_all(self) -> dict[str, TokenStatus]:
        """Probe every environment, one after another."""
        results: dict[str, TokenStatus] = {}
        for env in Environment:
            results[env.value] = await self.verify_environment(env)
        return results
