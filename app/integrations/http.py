"""Shared plumbing for HTTP provider clients.

Each provider client owns a ResiliencePolicy; every HTTP attempt goes
through it so transient failures are retried and counted by the
provider's circuit breaker.
"""

from typing import Any, Dict, Optional

import httpx
import structlog
from infrastructure.resilience import ResiliencePolicy
from integrations.errors import ProviderError, parse_retry_after

logger = structlog.get_logger()

MAX_ERROR_BODY_LENGTH = 2000


class HttpProviderClient:
    """Base class for provider clients posting over ``httpx.AsyncClient``.

    Subclasses set ``provider_name`` and may override ``error_from_response``
    to extract provider error codes.

    Args:
        http_client: Shared async HTTP client (owned by the caller)
        policy: Retry and circuit breaker policy for this provider
        timeout_seconds: Timeout applied to every attempt
    """

    provider_name: str = "provider"

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        policy: ResiliencePolicy,
        timeout_seconds: float = 10.0,
    ):
        self._http = http_client
        self.policy = policy
        self.timeout_seconds = timeout_seconds

    def error_from_response(self, response: httpx.Response) -> ProviderError:
        return ProviderError(
            self.provider_name,
            f"{self.provider_name} returned HTTP {response.status_code}",
            status_code=response.status_code,
            retry_after=parse_retry_after(response.headers.get("Retry-After")),
            response_body=response.text[:MAX_ERROR_BODY_LENGTH],
        )

    async def _post_once(self, url: str, **kwargs: Any) -> httpx.Response:
        response = await self._http.post(url, timeout=self.timeout_seconds, **kwargs)
        if response.is_success:
            return response
        raise self.error_from_response(response)

    async def post(
        self, url: str, log_context: Optional[Dict[str, Any]] = None, **kwargs: Any
    ) -> httpx.Response:
        """POST through the resilience policy and log the outcome.

        Raises:
            ProviderError: The provider rejected the request
            httpx.TransportError: Network failure after retries
            CircuitBreakerOpenError: The provider's circuit is open
        """
        log_context = log_context or {}
        try:
            response = await self.policy.execute(self._post_once, url, **kwargs)
        except Exception as e:
            logger.error(
                "provider_request_failed",
                provider=self.provider_name,
                error=str(e),
                error_type=type(e).__name__,
                status_code=getattr(e, "status_code", None),
                error_code=getattr(e, "error_code", None),
                **log_context,
            )
            raise

        logger.info(
            "provider_request_succeeded",
            provider=self.provider_name,
            status_code=response.status_code,
            **log_context,
        )
        return response


def phone_suffix(phone_number: str) -> str:
    """Last four digits of a phone number, for logs."""
    return phone_number[-4:]
