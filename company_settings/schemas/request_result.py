"""Outcome of one upstream request, after retries."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from company_settings.core.errors import (
    AuthenticationError,
    RequestFailedError,
    TransientError,
)

AUTH_FAILURE_STATUSES = (401, 403)


@dataclass(frozen=True)
class RequestResult:
    """Discriminated by ``success``.

    On success only ``body`` and ``status_code`` are set. On failure ``error``
    is set and, where known, the status code, upstream response text,
    originating environment, base URL and a masked token preview. The full
    token is never stored here. ``network_error`` tells transport failures
    apart from unexpected ones; it is not part of the caller-visible dict.
    """

    success: bool
    body: str | None = None
    status_code: int | None = None
    error: str | None = None
    response_text: str | None = None
    environment: str | None = None
    base_url: str | None = None
    token_preview: str | None = None
    # Set when the transport raised (timeout, refused connection, DNS)
    network_error: bool = False

    @classmethod
    def ok(cls, body: str, status_code: int) -> RequestResult:
        return cls(success=True, body=body, status_code=status_code)

    @classmethod
    def failure(
        cls,
        error: str,
        *,
        status_code: int | None = None,
        response_text: str | None = None,
        environment: str | None = None,
        base_url: str | None = None,
        token_preview: str | None = None,
        network_error: bool = False,
    ) -> RequestResult:
        return cls(
            success=False,
            error=error,
            status_code=status_code,
            response_text=response_text,
            environment=environment,
            base_url=base_url,
            token_preview=token_preview,
            network_error=network_error,
        )

    @property
    def is_auth_failure(self) -> bool:
        return not self.success and self.status_code in AUTH_FAILURE_STATUSES

    def to_dict(self) -> dict[str, Any]:
        """Caller-visible form: None fields omitted, raw body excluded."""
        data = {
            "success": self.success,
            "error": self.error,
            "status_code": self.status_code,
            "response_text": self.response_text,
            "environment": self.environment,
            "base_url": self.base_url,
            "token_preview": self.token_preview,
        }
        return {k: v for k, v in data.items() if v is not None}

    def to_exception(self) -> RequestFailedError:
        """Map a failed result onto the error taxonomy."""
        if self.success:
            raise ValueError("A successful result has no exception")
        if self.is_auth_failure:
            return AuthenticationError(self)
        if self.status_code is None or self.status_code >= 500:
            return TransientError(self)
        return RequestFailedError(self)
