"""Company Settings MCP server.

Reads company configuration settings from the settings API in the
production, integration and acceptance environments and exposes them as MCP
tools.
"""

__version__ = "1.0.0"
