"""Provider resilience settings."""

from pydantic import Field

from infrastructure.configuration.base import InfrastructureSettings


class ResilienceSettings(InfrastructureSettings):
    """Retry and circuit breaker configuration for provider calls.

    Environment Variables:
        PROVIDER_MAX_RETRIES: Retries after the first attempt (default: 3)
        PROVIDER_RETRY_BASE_DELAY_SECONDS: First backoff delay (default: 2.0)
        PROVIDER_RETRY_MAX_DELAY_SECONDS: Backoff cap (default: 30.0)
        PROVIDER_CIRCUIT_FAILURE_THRESHOLD: Consecutive transient failures
            before the circuit opens (default: 5)
        PROVIDER_CIRCUIT_TIMEOUT_SECONDS: Cool-down before a trial call (default: 30)
        PROVIDER_TIMEOUT_SECONDS: HTTP timeout per attempt (default: 10.0)

    Exponential Backoff:
        Delay calculation: min(base_delay * (2 ^ (retry - 1)), max_delay)

        Example with defaults (base=2s, max=30s):
            Retry 1: 2s
            Retry 2: 4s
            Retry 3: 8s
    """

    max_retries: int = Field(default=3, ge=0, alias="PROVIDER_MAX_RETRIES")
    retry_base_delay_seconds: float = Field(
        default=2.0, ge=0, alias="PROVIDER_RETRY_BASE_DELAY_SECONDS"
    )
    retry_max_delay_seconds: float = Field(
        default=30.0, ge=0, alias="PROVIDER_RETRY_MAX_DELAY_SECONDS"
    )
    circuit_failure_threshold: int = Field(
        default=5, ge=1, alias="PROVIDER_CIRCUIT_FAILURE_THRESHOLD"
    )
    circuit_timeout_seconds: float = Field(
        default=30, ge=0, alias="PROVIDER_CIRCUIT_TIMEOUT_SECONDS"
    )
    timeout_seconds: float = Field(default=10.0, gt=0, alias="PROVIDER_TIMEOUT_SECONDS")
