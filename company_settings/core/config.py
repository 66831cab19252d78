"""Configuration for the company settings service using pydantic-settings.

Settings are read from the process environment (and an optional ``.env``
file) once, by the composition root, and then passed to every component that
needs them. The object is frozen after construction.

Tokens can be given per environment (``TP_SETTINGS_TOKEN_PD``,
``TP_SETTINGS_TOKEN_IN``, ``TP_SETTINGS_TOKEN_AC``) or, for older setups, as a
single ``TP_SETTINGS_TOKEN`` shared by all three environments.
"""

from __future__ import annotations

from typing import Literal

from pydantic import AliasChoices, Field, ValidationError, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from company_settings.core.errors import ConfigurationError

ENVIRONMENT_TAGS = ("pd", "in", "ac")

# Tokens shorter than this are almost certainly truncated or placeholders
MIN_TOKEN_LENGTH = 10

DEFAULT_BASE_URLS = {
    "pd": "http://tpadmin.pd.tp.nil/api/internal/v1",
    "in": "http://tpadmin.in.tp.nil/api/internal/v1",
    "ac": "http://tpadmin.ac.tp.nil/api/internal/v1",
}


class Settings(BaseSettings):
    """Service settings.

    Field names are the Python-side names; each field reads the environment
    variable given in its alias.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )

    app_name: str = "company-settings"
    app_version: str = "1.0.0"

    # Credentials
    token_pd: str | None = Field(default=None, validation_alias="TP_SETTINGS_TOKEN_PD")
    token_in: str | None = Field(default=None, validation_alias="TP_SETTINGS_TOKEN_IN")
    token_ac: str | None = Field(default=None, validation_alias="TP_SETTINGS_TOKEN_AC")
    legacy_token: str | None = Field(default=None, validation_alias="TP_SETTINGS_TOKEN")

    # Upstream endpoints
    base_url_pd: str = Field(default=DEFAULT_BASE_URLS["pd"], validation_alias="TP_SETTINGS_BASE_PD")
    base_url_in: str = Field(default=DEFAULT_BASE_URLS["in"], validation_alias="TP_SETTINGS_BASE_IN")
    base_url_ac: str = Field(default=DEFAULT_BASE_URLS["ac"], validation_alias="TP_SETTINGS_BASE_AC")

    default_environment: str = Field(default="pd", validation_alias="TP_SETTINGS_DEFAULT_ENV")
    timeout_ms: int = Field(default=30000, gt=0, validation_alias="TP_SETTINGS_TIMEOUT")

    # Startup and transport
    verify_on_startup: bool = Field(default=True, validation_alias="TP_SETTINGS_VERIFY_ON_STARTUP")
    mcp_api_key: str = Field(default="", validation_alias="TP_SETTINGS_MCP_API_KEY")
    host: str = Field(default="127.0.0.1", validation_alias=AliasChoices("HOST", "host"))
    port: int = Field(default=3001, ge=1, le=65535, validation_alias=AliasChoices("PORT", "port"))

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", validation_alias=AliasChoices("LOG_LEVEL", "log_level")
    )
    log_format: Literal["dev", "structured"] = Field(
        default="dev", validation_alias=AliasChoices("LOG_FORMAT", "log_format")
    )

    @model_validator(mode="after")
    def _check_tokens_and_environment(self) -> Settings:
        per_env = {"pd": self.token_pd, "in": self.token_in, "ac": self.token_ac}

        if any(per_env.values()):
            for env, token in per_env.items():
                if not token:
                    raise ValueError(
                        f"Required environment variable TP_SETTINGS_TOKEN_{env.upper()} is not set. "
                        "Please check your .env file."
                    )
        elif not self.legacy_token:
            raise ValueError(
                "Required environment variable TP_SETTINGS_TOKEN is not set. "
                "Please check your .env file."
            )

        for env, token in self.environment_tokens.items():
            if len(token) < MIN_TOKEN_LENGTH:
                raise ValueError(
                    f"TP_SETTINGS_TOKEN_{env.upper()} appears to be invalid (too short). "
                    "Please check your token."
                )

        if self.default_environment not in ENVIRONMENT_TAGS:
            raise ValueError(
                f"TP_SETTINGS_DEFAULT_ENV must be one of: {', '.join(ENVIRONMENT_TAGS)}. "
                f"Got: {self.default_environment}"
            )
        return self

    @property
    def environment_tokens(self) -> dict[str, str]:
        """Token per environment tag, with the legacy token as fallback."""
        if self.token_pd or self.token_in or self.token_ac:
            return {"pd": self.token_pd or "", "in": self.token_in or "", "ac": self.token_ac or ""}
        token = self.legacy_token or ""
        return {tag: token for tag in ENVIRONMENT_TAGS}

    @property
    def base_urls(self) -> dict[str, str]:
        return {"pd": self.base_url_pd, "in": self.base_url_in, "ac": self.base_url_ac}

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000


def load_settings(**overrides) -> Settings:
    """Load and validate settings.

    Raises:
        ConfigurationError: If any variable is missing or malformed.
    """
    try:
        return Settings(**overrides)
    except ValidationError as e:
        reasons = "; ".join(err["msg"].removeprefix("Value error, ") for err in e.errors())
        raise ConfigurationError(f"Configuration error: {reasons}") from e
