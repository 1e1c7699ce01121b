"""Fixtures for provider client tests.

Provider HTTP calls are served by ``httpx.MockTransport`` handlers so the
clients, their error parsing and the resilience policy run for real.
"""

from typing import List

import httpx
import pytest
from unittest.mock import AsyncMock

from infrastructure.operations import is_transient_failure
from infrastructure.resilience import CircuitBreaker, ResiliencePolicy, RetryConfig


@pytest.fixture
def requests_seen() -> List[httpx.Request]:
    return []


@pytest.fixture
def mock_http(requests_seen):
    """Factory for an AsyncClient answering from a list of responses.

    The last response repeats once the list is exhausted.

    Example:
        client = mock_http([httpx.Response(503), httpx.Response(200)])
    """

    def _factory(responses) -> httpx.AsyncClient:
        responses = list(responses)

        def handler(request: httpx.Request) -> httpx.Response:
            requests_seen.append(request)
            item = responses.pop(0) if len(responses) > 1 else responses[0]
            if isinstance(item, Exception):
                raise item
            if callable(item):
                return item(request)
            return item

        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return _factory


@pytest.fixture
def retry_sleep():
    return AsyncMock()


@pytest.fixture
def policy_factory(retry_sleep):
    def _factory(name="test_provider", max_retries=3, failure_threshold=5):
        return ResiliencePolicy(
            name=name,
            config=RetryConfig(max_retries=max_retries),
            circuit_breaker=CircuitBreaker(
                name,
                failure_threshold=failure_threshold,
                failure_predicate=is_transient_failure,
            ),
            sleep=retry_sleep,
        )

    return _factory
