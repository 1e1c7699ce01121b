"""Unit tests for RetryConfig."""

import pytest

from infrastructure.resilience import RetryConfig


@pytest.mark.unit
class TestRetryConfig:
    def test_defaults(self):
        config = RetryConfig()

        assert config.max_retries == 3
        assert config.base_delay_seconds == 2.0
        assert config.max_delay_seconds == 30.0

    def test_exponential_backoff(self):
        config = RetryConfig()

        assert [config.delay_for(n) for n in (1, 2, 3)] == [2.0, 4.0, 8.0]

    def test_delay_is_capped(self):
        config = RetryConfig(base_delay_seconds=10, max_delay_seconds=15)

        assert config.delay_for(3) == 15

    def test_retry_after_raises_the_delay(self):
        assert RetryConfig().delay_for(1, retry_after=7) == 7

    def test_retry_after_shorter_than_backoff_is_ignored(self):
        assert RetryConfig().delay_for(3, retry_after=1) == 8.0

    def test_retry_after_is_capped(self):
        assert RetryConfig().delay_for(1, retry_after=600) == 30.0

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"max_retries": -1},
            {"base_delay_seconds": -1},
            {"base_delay_seconds": 10, "max_delay_seconds": 5},
        ],
    )
    def test_rejects_invalid_values(self, kwargs):
        with pytest.raises(ValueError):
            RetryConfig(**kwargs)

    def test_retry_number_is_one_based(self):
        with pytest.raises(ValueError):
            RetryConfig().delay_for(0)
