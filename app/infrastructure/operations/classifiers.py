"""Error classifiers for provider exceptions.

Converts exceptions raised around an outbound provider call (HTTP transport
errors, provider rejections, an open circuit) into standardized
OperationResult objects. The retry policy only retries TRANSIENT_ERROR
results and the circuit breaker only counts them.

Usage:
    from infrastructure.operations.classifiers import classify_provider_error

    try:
        await client.send(message)
    except Exception as exc:
        result = classify_provider_error(exc)
        if result.is_transient:
            ...
"""

import httpx

from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus
from integrations.errors import ProviderError

RETRYABLE_STATUS_CODES = frozenset({408, 429, 500, 502, 503, 504})

# Twilio: 20429 too many requests, 20500 internal error,
# 20503 service unavailable, 30001 queue overflow.
TRANSIENT_PROVIDER_ERROR_CODES = frozenset({"20429", "20500", "20503", "30001"})


def classify_provider_error(exc: BaseException) -> OperationResult:
    """Classify an exception raised by a provider call into OperationResult.

    Mapping:
    - httpx transport errors (connect, read, timeouts): TRANSIENT_ERROR
    - ProviderError with a provider code signalling throttling or a
      transient server fault: TRANSIENT_ERROR
    - ProviderError with status 408/429/500/502/503/504: TRANSIENT_ERROR
      (429 keeps the provider's ``retry_after``)
    - ProviderError with status 401/403: UNAUTHORIZED
    - Any other ProviderError: PERMANENT_ERROR
    - CircuitBreakerOpenError: PERMANENT_ERROR, the breaker already decided
    - Anything else: PERMANENT_ERROR

    Args:
        exc: Exception raised while calling the provider

    Returns:
        OperationResult with status, message, error_code and retry_after
    """
    # Circuit breaker errors are detected by duck typing to avoid a circular
    # import with infrastructure.resilience
    if getattr(exc, "is_circuit_open", False):
        return OperationResult.permanent_error(str(exc), error_code="CIRCUIT_OPEN")

    if isinstance(exc, httpx.TransportError):
        return OperationResult.transient_error(
            f"Connection error: {type(exc).__name__}: {str(exc)}",
            error_code="CONNECTION_ERROR",
        )

    if not isinstance(exc, ProviderError):
        return OperationResult.permanent_error(
            f"Unexpected error: {type(exc).__name__}: {str(exc)}",
            error_code="UNKNOWN_ERROR",
        )

    if exc.error_code and str(exc.error_code) in TRANSIENT_PROVIDER_ERROR_CODES:
        return OperationResult.transient_error(
            f"{exc.provider} transient error {exc.error_code}: {str(exc)}",
            error_code=f"PROVIDER_{exc.error_code}",
            retry_after=exc.retry_after,
        )

    status_code = exc.status_code

    if status_code == 429:
        return OperationResult.error(
            OperationStatus.TRANSIENT_ERROR,
            f"{exc.provider} rate limited",
            error_code="RATE_LIMITED",
            retry_after=exc.retry_after,
        )

    if status_code in RETRYABLE_STATUS_CODES:
        return OperationResult.transient_error(
            f"{exc.provider} server error ({status_code})",
            error_code=f"HTTP_{status_code}",
        )

    if status_code in (401, 403):
        return OperationResult.error(
            OperationStatus.UNAUTHORIZED,
            f"{exc.provider} rejected credentials ({status_code})",
            error_code="UNAUTHORIZED",
        )

    if status_code and 400 <= status_code < 500:
        return OperationResult.permanent_error(
            f"{exc.provider} client error ({status_code}): {str(exc)}",
            error_code=f"HTTP_{status_code}",
        )

    return OperationResult.permanent_error(
        f"{exc.provider} error: {str(exc)}",
        error_code="PROVIDER_ERROR",
    )


def is_transient_failure(exc: BaseException) -> bool:
    """Predicate form of classify_provider_error for the circuit breaker."""
    return classify_provider_error(exc).is_transient
