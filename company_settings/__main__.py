"""Run the company settings MCP server: ``python -m company_settings``."""

import sys

import uvicorn

from company_settings.core import ConfigurationError, load_settings
from company_settings.main import create_app


def main() -> None:
    try:
        settings = load_settings()
    except ConfigurationError as e:
        sys.exit(f"Failed to start MCP server: {e}")

    app = create_app(settings)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
