"""MCP Gateway - JSON-RPC endpoint exposing the company settings tools.

Supported methods:
- initialize: protocol handshake
- notifications/*: one-way messages, acknowledged with 202
- ping: liveness
- tools/list: the settings tools
- tools/call: run a settings tool
- resources/list, resources/read: the ``info://status`` resource
"""

import json
import logging
import time
from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import Response
from pydantic import BaseModel, ValidationError

from company_settings.api.auth import verify_api_key
from company_settings.api.dependencies import get_settings, get_settings_service
from company_settings.api.tool_definitions import SETTINGS_TOOLS, TOOL_NAMES
from company_settings.core.config import Settings
from company_settings.core.errors import ConfigurationError
from company_settings.schemas.tools import GetSettingArgs, ListSettingsArgs, SearchInSettingArgs
from company_settings.services.company_settings import CompanySettingsService

logger = logging.getLogger(__name__)

MCP_PROTOCOL_VERSION = "2025-03-26"

STATUS_RESOURCE_URI = "info://status"

# JSON-RPC error codes
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603

router = APIRouter(tags=["mcp"])


# --- MCP Protocol Models ---


class MCPRequest(BaseModel):
    """MCP JSON-RPC request or notification.

    Notifications carry no ``id`` and get no response body.
    """

    jsonrpc: str = "2.0"
    id: int | str | None = None
    method: str
    params: dict[str, Any] | None = None


class MCPResponse(BaseModel):
    """MCP JSON-RPC response."""

    jsonrpc: str = "2.0"
    id: int | str | None = None
    result: dict[str, Any] | None = None
    error: dict[str, Any] | None = None


class ToolCallError(Exception):
    """A tools/call request that cannot be dispatched."""

    def __init__(self, code: int, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


def _tool_result(payload: dict[str, Any]) -> dict[str, Any]:
    """Wrap a service payload as MCP tool content."""
    return {
        "content": [{"type": "text", "text": json.dumps(payload, indent=2, default=str)}],
        "isError": payload.get("success") is False,
    }


async def _handle_tool_call(
    service: CompanySettingsService,
    tool_name: str,
    arguments: dict[str, Any],
) -> dict[str, Any]:
    if tool_name not in TOOL_NAMES:
        raise ToolCallError(INVALID_PARAMS, f"Unknown tool: {tool_name}")

    try:
        if tool_name == "list_company_settings":
            payload = await service.list_settings(ListSettingsArgs.model_validate(arguments))
        elif tool_name == "get_company_setting":
            payload = await service.get_setting(GetSettingArgs.model_validate(arguments))
        elif tool_name == "search_in_setting":
            payload = await service.search_in_setting(
                SearchInSettingArgs.model_validate(arguments)
            )
        else:
            payload = await service.verify_tokens()
    except ValidationError as e:
        payload = {"success": False, "error": f"Invalid arguments for {tool_name}: {e}"}
    except ConfigurationError as e:
        payload = {"success": False, "error": e.message}

    return _tool_result(payload)


def _status_resource(settings: Settings) -> dict[str, Any]:
    return {
        "contents": [
            {
                "uri": STATUS_RESOURCE_URI,
                "mimeType": "text/plain",
                "text": (
                    f"Company Settings MCP server is running. "
                    f"Default environment: {settings.default_environment}"
                ),
            }
        ]
    }


@router.post("/mcp", response_model=None, dependencies=[Depends(verify_api_key)])
async def mcp_gateway(
    request: MCPRequest,
    settings: Settings = Depends(get_settings),
    service: CompanySettingsService = Depends(get_settings_service),
) -> dict[str, Any] | Response:
    """MCP JSON-RPC gateway endpoint."""
    start_time = time.time()
    method = request.method
    params = request.params or {}
    logger.info("MCP %s (id=%s)", method, request.id)

    response_result: dict[str, Any] | None = None
    response_error: dict[str, Any] | None = None

    try:
        if method == "initialize":
            response_result = {
                "protocolVersion": MCP_PROTOCOL_VERSION,
                "capabilities": {"tools": {}, "resources": {}},
                "serverInfo": {"name": settings.app_name, "version": settings.app_version},
            }

        elif method.startswith("notifications/"):
            return Response(status_code=202)

        elif method == "ping":
            response_result = {}

        elif method == "tools/list":
            response_result = {"tools": SETTINGS_TOOLS}

        elif method == "tools/call":
            response_result = await _handle_tool_call(
                service,
                params.get("name", ""),
                params.get("arguments") or {},
            )

        elif method == "resources/list":
            response_result = {
                "resources": [
                    {
                        "uri": STATUS_RESOURCE_URI,
                        "name": "Server Status",
                        "description": "Current server status",
                        "mimeType": "text/plain",
                    }
                ]
            }

        elif method == "resources/read":
            if params.get("uri") == STATUS_RESOURCE_URI:
                response_result = _status_resource(settings)
            else:
                response_error = {
                    "code": INVALID_PARAMS,
                    "message": f"Resource not found: {params.get('uri')}",
                }

        else:
            response_error = {"code": METHOD_NOT_FOUND, "message": f"Method not found: {method}"}

    except ToolCallError as e:
        response_error = {"code": e.code, "message": e.message}
    except Exception as e:
        logger.exception(f"MCP gateway error: {e}")
        response_error = {"code": INTERNAL_ERROR, "message": f"Internal error: {e}"}

    duration_ms = int((time.time() - start_time) * 1000)
    logger.info("MCP %s completed in %dms (error=%s)", method, duration_ms, bool(response_error))

    if response_error:
        response = MCPResponse(id=request.id, error=response_error)
    else:
        response = MCPResponse(id=request.id, result=response_result)
    return response.model_dump(exclude_none=True)
