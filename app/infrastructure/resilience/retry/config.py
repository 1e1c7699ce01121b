"""Retry policy configuration.

This module defines configuration for retrying provider calls.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class RetryConfig:
    """Configuration for provider call retries.

    Attributes:
        max_retries: Retries after the first attempt (total attempts = max_retries + 1)
        base_delay_seconds: Delay before the first retry, doubled for each further retry
        max_delay_seconds: Cap applied to every computed delay

    Example:
        # Defaults: retries after 2s, 4s and 8s
        config = RetryConfig()

        # Tests
        config = RetryConfig(max_retries=3, base_delay_seconds=0)
    """

    max_retries: int = 3
    base_delay_seconds: float = 2.0
    max_delay_seconds: float = 30.0

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.max_retries < 0:
            raise ValueError("max_retries must be at least 0")
        if self.base_delay_seconds < 0:
            raise ValueError("base_delay_seconds must be at least 0")
        if self.max_delay_seconds < self.base_delay_seconds:
            raise ValueError("max_delay_seconds must be >= base_delay_seconds")

    def delay_for(self, retry_number: int, retry_after: Optional[float] = None) -> float:
        """Backoff before retry ``retry_number`` (1-based).

        Delay calculation: min(base_delay * 2 ** (retry_number - 1), max_delay),
        raised to the provider's ``retry_after`` when it asked for longer.
        """
        if retry_number < 1:
            raise ValueError("retry_number must be at least 1")
        delay = self.base_delay_seconds * (2 ** (retry_number - 1))
        if retry_after is not None:
            delay = max(delay, retry_after)
        return min(delay, self.max_delay_seconds)
