"""Unit tests for settings loading and provider validation."""

import pytest
from pydantic import ValidationError

from infrastructure.configuration import QueueSettings, ResilienceSettings, Settings
from infrastructure.configuration.integrations import (
    FolioSettings,
    SendGridSettings,
    TwilioSettings,
)


@pytest.mark.unit
class TestSettingsFromEnvironment:
    def test_sections_read_their_own_variables(self, monkeypatch):
        monkeypatch.setenv("SMS_PROVIDER", "twilio")
        monkeypatch.setenv("TWILIO_ACCOUNT_SID", "AC999")
        monkeypatch.setenv("PROVIDER_MAX_RETRIES", "5")
        monkeypatch.setenv("NOTIFICATION_QUEUE_DRAIN_ON_SHUTDOWN", "true")

        settings = Settings()

        assert settings.sms_provider == "twilio"
        assert settings.twilio.account_sid == "AC999"
        assert settings.resilience.max_retries == 5
        assert settings.queue.drain_on_shutdown is True

    def test_unknown_provider_is_rejected(self, monkeypatch):
        monkeypatch.setenv("SMS_PROVIDER", "carrier-pigeon")

        with pytest.raises(ValidationError):
            Settings()

    def test_is_production_without_prefix(self):
        assert Settings(PREFIX="").is_production is True
        assert Settings(PREFIX="dev-").is_production is False

    def test_explicit_sections_are_kept(self):
        folio = FolioSettings(FOLIO_BASE_URL="https://folio.example.com", FOLIO_API_KEY="k")

        assert Settings(folio=folio).folio is folio


@pytest.mark.unit
class TestInfrastructureSettings:
    def test_resilience_defaults(self):
        settings = ResilienceSettings()

        assert settings.max_retries == 3
        assert settings.retry_base_delay_seconds == 2.0
        assert settings.retry_max_delay_seconds == 30.0
        assert settings.circuit_failure_threshold == 5

    def test_negative_retries_rejected(self):
        with pytest.raises(ValidationError):
            ResilienceSettings(PROVIDER_MAX_RETRIES=-1)

    def test_queue_defaults(self):
        settings = QueueSettings()

        assert settings.enabled is True
        assert settings.drain_on_shutdown is False
        assert settings.shutdown_timeout_seconds == 10.0


@pytest.mark.unit
class TestProviderSettings:
    def test_folio_requires_url_and_key(self):
        with pytest.raises(ValueError) as exc_info:
            FolioSettings(FOLIO_BASE_URL=None, FOLIO_API_KEY=None).validate_configured()

        assert "FOLIO_BASE_URL" in str(exc_info.value)
        assert "FOLIO_API_KEY" in str(exc_info.value)

    def test_folio_url_must_be_http(self):
        with pytest.raises(ValidationError):
            FolioSettings(FOLIO_BASE_URL="ftp://folio.example.com")

    def test_twilio_sender_must_be_e164(self):
        with pytest.raises(ValidationError):
            TwilioSettings(TWILIO_NUMBER_FROM="5815550000")

    def test_twilio_reports_only_missing_fields(self):
        settings = TwilioSettings(
            TWILIO_ACCOUNT_SID="AC123",
            TWILIO_AUTH_TOKEN="token",
            TWILIO_NUMBER_FROM=None,
        )

        assert settings.missing_fields("account_sid", "auth_token", "number_from") == [
            "TWILIO_NUMBER_FROM"
        ]

    def test_sendgrid_requires_sender_name(self):
        settings = SendGridSettings(
            SENDGRID_API_KEY="SG.key",
            SENDGRID_FROM_EMAIL="noreply@example.com",
            SENDGRID_FROM_NAME=None,
        )

        with pytest.raises(ValueError, match="SENDGRID_FROM_NAME"):
            settings.validate_configured()

    def test_sendgrid_sender_name_length(self):
        with pytest.raises(ValidationError):
            SendGridSettings(SENDGRID_FROM_NAME="x" * 101)

    def test_configured_sendgrid_passes(self):
        SendGridSettings(
            SENDGRID_API_KEY="SG.key",
            SENDGRID_FROM_EMAIL=" noreply@example.com ",
            SENDGRID_FROM_NAME="Notifications",
        ).validate_configured()
