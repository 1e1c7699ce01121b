"""Retry and circuit breaker policy applied around provider calls.

A ResiliencePolicy is owned by one provider client. Retry is the outer
layer and the circuit breaker the inner one, so every attempt is seen by
the breaker and an open circuit stops the retries immediately.

Usage:
    policy = ResiliencePolicy(
        name="folio_sms",
        config=RetryConfig(max_retries=3),
        circuit_breaker=CircuitBreaker("folio_sms", failure_predicate=is_transient_failure),
    )
    await policy.execute(client.post, "send", data=payload)
"""

import asyncio
from typing import Any, Awaitable, Callable, Optional

import structlog
from infrastructure.operations.classifiers import classify_provider_error
from infrastructure.operations.result import OperationResult
from infrastructure.resilience.circuit_breaker import CircuitBreaker
from infrastructure.resilience.retry.config import RetryConfig

logger = structlog.get_logger()

Classifier = Callable[[BaseException], OperationResult]


class ResiliencePolicy:
    """Retries transient provider failures with exponential backoff.

    Attributes:
        name: Policy name used in logs (typically the provider)
        config: RetryConfig controlling attempts and backoff
        circuit_breaker: Optional breaker every attempt goes through
        classifier: Maps an exception to a transient/permanent OperationResult
    """

    def __init__(
        self,
        name: str,
        config: Optional[RetryConfig] = None,
        circuit_breaker: Optional[CircuitBreaker] = None,
        classifier: Optional[Classifier] = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        self.name = name
        self.config = config or RetryConfig()
        self.circuit_breaker = circuit_breaker
        self.classifier = classifier or classify_provider_error
        self._sleep = sleep
        self.log = logger.bind(component="resilience_policy", policy=name)

    async def execute(
        self, func: Callable[..., Awaitable[Any]], *args: Any, **kwargs: Any
    ) -> Any:
        """Await ``func`` applying the retry and circuit breaker policy.

        Non-retryable failures propagate on the first attempt. When retries
        are exhausted the last exception is re-raised unchanged. Cancellation
        during a call or a backoff sleep propagates as CancelledError.

        Returns:
            Whatever ``func`` returns
        """
        retry_number = 0

        while True:
            try:
                return await self._attempt(func, *args, **kwargs)
            except Exception as exc:
                classification = self.classifier(exc)

                if not classification.is_transient:
                    self.log.debug(
                        "provider_call_not_retryable",
                        error_code=classification.error_code,
                        status=classification.status.value,
                    )
                    raise

                if retry_number >= self.config.max_retries:
                    self.log.error(
                        "provider_call_retries_exhausted",
                        attempts=retry_number + 1,
                        error_code=classification.error_code,
                        error=str(exc),
                    )
                    raise

                retry_number += 1
                delay = self.config.delay_for(
                    retry_number, retry_after=classification.retry_after
                )
                self.log.warning(
                    "provider_call_retry",
                    attempt=retry_number,
                    max_retries=self.config.max_retries,
                    delay_seconds=delay,
                    error_code=classification.error_code,
                    error=str(exc),
                )
                await self._sleep(delay)

    async def _attempt(
        self, func: Callable[..., Awaitable[Any]], *args: Any, **kwargs: Any
    ) -> Any:
        if self.circuit_breaker is not None:
            return await self.circuit_breaker.call(func, *args, **kwargs)
        return await func(*args, **kwargs)
