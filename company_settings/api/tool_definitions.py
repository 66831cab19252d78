"""MCP tool definitions exposed by the company settings server."""

from typing import Any

ENVIRONMENT_PROPERTY: dict[str, Any] = {
    "type": "string",
    "enum": ["pd", "in", "ac"],
    "description": "Environment: pd, in, or ac (defaults to TP_SETTINGS_DEFAULT_ENV)",
}

SETTING_TYPE_PROPERTY: dict[str, Any] = {
    "type": "string",
    "enum": ["APPLICATION", "COMPANY", "SCHEDULING_UNIT", "USER"],
    "description": "Optional: Filter by setting type",
}

_FILTER_PROPERTIES: dict[str, Any] = {
    "environment": ENVIRONMENT_PROPERTY,
    "type": SETTING_TYPE_PROPERTY,
    "owner": {"type": "integer", "description": "Optional: Filter by owner ID"},
    "childObject": {"type": "integer", "description": "Optional: Filter by child object ID"},
}

SETTINGS_TOOLS: list[dict[str, Any]] = [
    {
        "name": "list_company_settings",
        "description": (
            "List all company settings from the settings API. Returns settings "
            "formatted as Markdown, grouped by type."
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "companyId": {"type": "integer", "description": "Company ID (integer)"},
                "keyName": {
                    "type": "string",
                    "description": "Optional: Filter by specific setting key name",
                },
                **_FILTER_PROPERTIES,
            },
            "required": ["companyId"],
        },
    },
    {
        "name": "get_company_setting",
        "description": (
            "Get a specific company setting by key name. Returns the setting with "
            "its value decoded if it was encoded. Use limit/offset to page through "
            "long values line by line."
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "companyId": {"type": "integer", "description": "Company ID (integer)"},
                "keyName": {"type": "string", "description": "Setting key name to retrieve"},
                **_FILTER_PROPERTIES,
                "limit": {
                    "type": "integer",
                    "description": "Optional: Limit the number of lines returned",
                    "minimum": 1,
                },
                "offset": {
                    "type": "integer",
                    "description": "Optional: Number of lines to skip from the beginning",
                    "minimum": 0,
                },
            },
            "required": ["companyId", "keyName"],
        },
    },
    {
        "name": "search_in_setting",
        "description": (
            "Search for specific text within a company setting and return matching "
            "lines with surrounding context."
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "companyId": {"type": "integer", "description": "Company ID (integer)"},
                "keyName": {"type": "string", "description": "Setting key name to search within"},
                "searchTerm": {
                    "type": "string",
                    "description": "Text to search for within the setting value",
                },
                **_FILTER_PROPERTIES,
                "contextLines": {
                    "type": "integer",
                    "description": "Lines before and after each match to include (default: 3)",
                    "default": 3,
                    "minimum": 0,
                },
            },
            "required": ["companyId", "keyName", "searchTerm"],
        },
    },
    {
        "name": "verify_environment_tokens",
        "description": (
            "Verify that the tokens of all environments (pd, in, ac) are accepted by "
            "making a test request to each environment. Helps diagnose authentication issues."
        ),
        "inputSchema": {"type": "object", "properties": {}, "required": []},
    },
]

TOOL_NAMES = frozenset(tool["name"] for tool in SETTINGS_TOOLS)
