"""MCP endpoint authentication - optional API key check.

When ``TP_SETTINGS_MCP_API_KEY`` is empty the endpoint is open, which is the
expected setup behind a local-only bind. When it is set, every request must
carry the same value in ``X-API-Key``.
"""

import hmac
import logging
from typing import Optional

from fastapi import Depends, Header, HTTPException, status

from company_settings.api.dependencies import get_settings
from company_settings.core.config import Settings

logger = logging.getLogger(__name__)


async def verify_api_key(
    x_api_key: Optional[str] = Header(None, alias="X-API-Key"),
    settings: Settings = Depends(get_settings),
) -> None:
    """Verify the API key for MCP access.

    Raises:
        HTTPException: If a key is configured and the header is missing or wrong.
    """
    expected = settings.mcp_api_key
    if not expected:
        return

    if not x_api_key:
        logger.warning("Rejected request: missing X-API-Key header")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing X-API-Key header",
        )

    # Use constant-time comparison to prevent timing attacks
    if not hmac.compare_digest(x_api_key, expected):
        logger.warning("Rejected request: invalid API key")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid API key",
        )
