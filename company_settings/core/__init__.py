# Company Settings Core Module
from .config import Settings, load_settings
from .environments import Environment, EnvironmentResolver, EnvironmentTarget, mask_token
from .errors import (
    AuthenticationError,
    ConfigurationError,
    DecodeError,
    ParseError,
    RequestFailedError,
    SettingsServiceError,
    TransientError,
)
from .logging import setup_logging

__all__ = [
    "Settings",
    "load_settings",
    "setup_logging",
    "Environment",
    "EnvironmentResolver",
    "EnvironmentTarget",
    "mask_token",
    "SettingsServiceError",
    "ConfigurationError",
    "RequestFailedError",
    "AuthenticationError",
    "TransientError",
    "ParseError",
    "DecodeError",
]
