"""Retry policy for upstream settings API calls.

Every failed attempt is retried, whatever the status code, until the attempt
budget is spent. Delays grow exponentially and carry no jitter.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class RetryConfig:
    """Configuration for retry behavior."""

    max_attempts: int = 3  # Total attempts, including the first
    base_delay: float = 0.25  # Base delay in seconds
    exponential_base: float = 2.0  # Exponential backoff multiplier


DEFAULT_RETRY_CONFIG = RetryConfig()

# Token probes must answer quickly; a single attempt is enough to classify
PROBE_RETRY_CONFIG = RetryConfig(max_attempts=1)


def calculate_backoff_delay(attempt: int, config: RetryConfig) -> float:
    """Delay in seconds to wait after a failed 1-based ``attempt``.

    Yields 0.25, 0.5, 1.0, ... with the default configuration.
    """
    return config.base_delay * (config.exponential_base ** (attempt - 1))


def should_retry(attempt: int, config: RetryConfig) -> bool:
    """Whether another attempt follows the 1-based ``attempt``."""
    return attempt < config.max_attempts
