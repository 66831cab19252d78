"""Company settings service logging configuration.

All output goes to stderr. Messages pass through a filter that masks bearer
credentials, so an exception text that happens to echo an Authorization
header never leaks a full token.
"""

import json
import logging
import re
import sys
from typing import Literal

DEV_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DEV_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Keep in step with mask_token(): first 10 characters stay visible
_BEARER = re.compile(r"(Bearer\s+)([A-Za-z0-9._~+/=-]{10})[A-Za-z0-9._~+/=-]*")

# Loggers that are chatty at INFO; httpx logs each request line with its query string
QUIET_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")
HTTP_CLIENT_LOGGERS = ("httpx", "httpcore")


def redact_bearer(text: str) -> str:
    """Mask every ``Bearer <token>`` occurrence in ``text``."""
    return _BEARER.sub(r"\1\2...", text)


class BearerRedactionFilter(logging.Filter):
    """Rewrites records so bearer tokens only appear masked."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = redact_bearer(message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


class JSONFormatter(logging.Formatter):
    """One JSON object per line.

    Built with json.dumps() so multi-line setting values or quotes echoed in
    diagnostics cannot break the line format.
    """

    def __init__(self):
        super().__init__(datefmt="%Y-%m-%dT%H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        environment = getattr(record, "environment", None)
        if environment:
            log_entry["environment"] = environment
        if record.exc_info and record.exc_info[0] is not None:
            log_entry["exception"] = redact_bearer(self.formatException(record.exc_info))
        return json.dumps(log_entry, default=str)


def _build_handler(format_type: str) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    if format_type == "structured":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(DEV_FORMAT, datefmt=DEV_DATEFMT))
    handler.addFilter(BearerRedactionFilter())
    return handler


def setup_logging(
    level: str = "INFO",
    format_type: Literal["structured", "dev"] = "dev",
) -> None:
    """
    Configure application logging.

    Replaces any handlers already installed on the root logger.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_type: Log format - 'structured' for JSON, 'dev' for readable
    """
    numeric_level = getattr(logging, level.upper())
    logging.root.handlers = [_build_handler(format_type)]
    logging.root.setLevel(numeric_level)

    for logger_name in QUIET_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    for logger_name in HTTP_CLIENT_LOGGERS:
        logging.getLogger(logger_name).setLevel(
            logging.DEBUG if numeric_level == logging.DEBUG else logging.WARNING
        )

    logging.getLogger("company_settings").info(
        f"Logging configured: level={level}, format={format_type}"
    )


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the company_settings prefix."""
    return logging.getLogger(f"company_settings.{name}")
