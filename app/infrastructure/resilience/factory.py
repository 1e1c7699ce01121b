"""Factory for the per-provider resilience policy."""

from typing import TYPE_CHECKING

import structlog
from infrastructure.operations.classifiers import is_transient_failure
from infrastructure.resilience.circuit_breaker import (
    CircuitBreaker,
    register_circuit_breaker,
)
from infrastructure.resilience.retry.config import RetryConfig
from infrastructure.resilience.retry.policy import ResiliencePolicy

if TYPE_CHECKING:
    from infrastructure.configuration.infrastructure.resilience import (
        ResilienceSettings,
    )

logger = structlog.get_logger()


def build_provider_policy(name: str, settings: "ResilienceSettings") -> ResiliencePolicy:
    """Create the retry + circuit breaker policy for one provider.

    The breaker only counts transient failures and is registered for
    monitoring under ``name``.

    Args:
        name: Provider policy name (e.g. "folio_sms")
        settings: Resilience settings section

    Returns:
        ResiliencePolicy owning its own CircuitBreaker
    """
    breaker = CircuitBreaker(
        name=name,
        failure_threshold=settings.circuit_failure_threshold,
        timeout_seconds=settings.circuit_timeout_seconds,
        failure_predicate=is_transient_failure,
    )
    register_circuit_breaker(breaker)

    config = RetryConfig(
        max_retries=settings.max_retries,
        base_delay_seconds=settings.retry_base_delay_seconds,
        max_delay_seconds=settings.retry_max_delay_seconds,
    )

    logger.info(
        "initialized_provider_policy",
        name=name,
        max_retries=config.max_retries,
        failure_threshold=breaker.failure_threshold,
        timeout_seconds=breaker.timeout_seconds,
    )
    return ResiliencePolicy(name=name, config=config, circuit_breaker=breaker)
