"""Environment resolution: environment tag -> (base URL, token)."""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple

from company_settings.core.config import Settings
from company_settings.core.errors import ConfigurationError

TOKEN_PREVIEW_LENGTH = 10


class Environment(str, Enum):
    """Deployment targets of the upstream settings API."""

    PD = "pd"  # Production
    IN = "in"  # Integration
    AC = "ac"  # Acceptance

    @classmethod
    def parse(cls, tag: Environment | str) -> Environment:
        """Parse an environment tag, raising ConfigurationError if unknown."""
        if isinstance(tag, cls):
            return tag
        try:
            return cls(tag)
        except ValueError:
            known = ", ".join(e.value for e in cls)
            raise ConfigurationError(
                f"Unknown environment '{tag}'. Must be one of: {known}"
            ) from None


class EnvironmentTarget(NamedTuple):
    """Where and with which credential to call for one environment."""

    base_url: str
    token: str


def mask_token(token: str | None) -> str:
    """Preview of a credential safe for results and logs."""
    return f"{(token or '')[:TOKEN_PREVIEW_LENGTH]}..."


class EnvironmentResolver:
    """Maps environment tags to base URL and credential.

    Pure lookup over a read-only Settings value; performs no I/O.
    """

    def __init__(self, settings: Settings | None):
        self._settings = settings

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            raise ConfigurationError("Configuration error: configuration has not been loaded")
        return self._settings

    @property
    def default_environment(self) -> Environment:
        return Environment.parse(self.settings.default_environment)

    def resolve(self, environment: Environment | str) -> EnvironmentTarget:
        """Resolve an environment to its target.

        Raises:
            ConfigurationError: Unknown environment, missing configuration, or
                an environment without a base URL or token.
        """
        env = Environment.parse(environment)
        settings = self.settings
        base_url = settings.base_urls.get(env.value, "")
        token = settings.environment_tokens.get(env.value, "")
        if not base_url or not token:
            raise ConfigurationError(
                f"Configuration error: environment '{env.value}' has no base URL or token configured"
            )
        return EnvironmentTarget(base_url=base_url.rstrip("/"), token=token)
