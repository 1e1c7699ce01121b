"""Retry policy for outbound provider calls."""

from infrastructure.resilience.retry.config import RetryConfig
from infrastructure.resilience.retry.policy import ResiliencePolicy

__all__ = [
    "RetryConfig",
    "ResiliencePolicy",
]
