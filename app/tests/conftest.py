import pytest
import structlog

from infrastructure.configuration import Settings
from infrastructure.configuration.infrastructure import QueueSettings, ResilienceSettings
from infrastructure.configuration.integrations import (
    FolioSettings,
    SendGridSettings,
    TwilioSettings,
)
from infrastructure.logging.setup import configure_logging
from infrastructure.resilience import clear_circuit_breaker_registry

# Silences log output for the whole session
configure_logging()


@pytest.fixture(autouse=True)
def reset_circuit_breaker_registry():
    """Every test starts without registered circuit breakers."""
    clear_circuit_breaker_registry()
    yield
    clear_circuit_breaker_registry()


@pytest.fixture(autouse=True)
def clear_log_context():
    structlog.contextvars.clear_contextvars()
    yield
    structlog.contextvars.clear_contextvars()


@pytest.fixture
def settings_factory():
    """Factory for Settings with every provider configured.

    Example:
        settings = settings_factory(SMS_PROVIDER="twilio", max_retries=0)
    """

    def _factory(
        SMS_PROVIDER: str = "folio",
        EMAIL_PROVIDER: str = "sendgrid",
        max_retries: int = 3,
        drain_on_shutdown: bool = False,
        **overrides,
    ) -> Settings:
        sections = {
            "folio": FolioSettings(
                FOLIO_BASE_URL="https://folio.example.com/api",
                FOLIO_API_KEY="folio-key",
            ),
            "twilio": TwilioSettings(
                TWILIO_ACCOUNT_SID="AC123",
                TWILIO_AUTH_TOKEN="twilio-token",
                TWILIO_NUMBER_FROM="+15815550000",
            ),
            "sendgrid": SendGridSettings(
                SENDGRID_API_KEY="SG.key",
                SENDGRID_FROM_EMAIL="noreply@example.com",
                SENDGRID_FROM_NAME="Notifications",
            ),
            "resilience": ResilienceSettings(
                PROVIDER_MAX_RETRIES=max_retries,
                PROVIDER_RETRY_BASE_DELAY_SECONDS=0,
                PROVIDER_RETRY_MAX_DELAY_SECONDS=0,
            ),
            "queue": QueueSettings(
                NOTIFICATION_QUEUE_DRAIN_ON_SHUTDOWN=drain_on_shutdown,
                NOTIFICATION_QUEUE_SHUTDOWN_TIMEOUT_SECONDS=2,
            ),
        }
        sections.update(overrides)
        return Settings(
            SMS_PROVIDER=SMS_PROVIDER,
            EMAIL_PROVIDER=EMAIL_PROVIDER,
            **sections,
        )

    return _factory
