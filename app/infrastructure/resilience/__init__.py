"""Resilience patterns and implementations.

This module contains the circuit breaker and retry policy applied around
every outbound provider call.
"""

from infrastructure.resilience.circuit_breaker import (
    CircuitBreaker,
    CircuitBreakerOpenError,
    CircuitState,
    clear_circuit_breaker_registry,
    register_circuit_breaker,
    get_circuit_breaker,
    get_all_circuit_breaker_stats,
    get_open_circuit_breakers,
)
from infrastructure.resilience.retry import (
    ResiliencePolicy,
    RetryConfig,
)
from infrastructure.resilience.factory import build_provider_policy

__all__ = [
    # Circuit Breaker
    "CircuitBreaker",
    "CircuitBreakerOpenError",
    "CircuitState",
    "clear_circuit_breaker_registry",
    "register_circuit_breaker",
    "get_circuit_breaker",
    "get_all_circuit_breaker_stats",
    "get_open_circuit_breakers",
    # Retry
    "ResiliencePolicy",
    "RetryConfig",
    "build_provider_policy",
]
