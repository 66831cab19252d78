"""Error taxonomy for the company settings service.

The request executor never raises for HTTP-level failures; it returns a
RequestResult. These exceptions are how a failed result, a bad payload or a
bad configuration travels up to the service layer, which turns them into
structured failure payloads.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from company_settings.schemas.request_result import RequestResult


class SettingsServiceError(Exception):
    """Base error for the company settings service."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ConfigurationError(SettingsServiceError):
    """Missing or malformed environment-derived configuration.

    Fatal: raised before any request is attempted.
    """


class RequestFailedError(SettingsServiceError):
    """A request exhausted its attempts without a 200 response."""

    def __init__(self, result: RequestResult):
        super().__init__(result.error or "Unknown error", status_code=result.status_code)
        self.result = result


class AuthenticationError(RequestFailedError):
    """Upstream rejected the credential (401/403)."""

    pass


class TransientError(RequestFailedError):
    """Server-side (5xx) or network-level failure."""

    pass


class ParseError(SettingsServiceError):
    """Malformed or unrecognized payload. Never retried."""

    pass


class DecodeError(SettingsServiceError):
    """Base64/UTF-8 decoding failed. Always swallowed by the value codec."""

    pass
