"""Notification dispatcher configuration settings - main aggregator."""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Integration settings
from infrastructure.configuration.integrations import (
    FolioSettings,
    SendGridSettings,
    TwilioSettings,
)

# Infrastructure settings
from infrastructure.configuration.infrastructure import (
    QueueSettings,
    ResilienceSettings,
)


class Settings(BaseSettings):
    """Notification dispatcher configuration settings - main aggregator.

    Aggregates all domain-specific settings into a single configuration object.
    Settings are organized by concern:

    - **Integrations**: Provider configurations (Folio, Twilio, SendGrid)
    - **Infrastructure**: Core system configurations (resilience, queue)

    Environment Variables:
        PREFIX: Environment prefix for multi-tenant deployments
        LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)
        GIT_SHA: Git commit SHA for deployment tracking
        SMS_PROVIDER: SMS client wired into the SMS channel (folio, twilio, none)
        EMAIL_PROVIDER: Email client wired into the email channel (sendgrid, none)
        DEFAULT_LOCALE: Locale used when a request does not supply one

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()

        if settings.sms_provider == "folio":
            base_url = settings.folio.base_url

        max_retries = settings.resilience.max_retries
        ```
    """

    # Application-level settings
    PREFIX: str = ""
    LOG_LEVEL: str = "INFO"
    GIT_SHA: str = "Unknown"

    sms_provider: Literal["folio", "twilio", "none"] = Field(
        default="folio", alias="SMS_PROVIDER"
    )
    email_provider: Literal["sendgrid", "none"] = Field(
        default="sendgrid", alias="EMAIL_PROVIDER"
    )
    default_locale: str = Field(default="en-CA", alias="DEFAULT_LOCALE")

    # Integration settings
    folio: FolioSettings
    twilio: TwilioSettings
    sendgrid: SendGridSettings

    # Infrastructure settings
    resilience: ResilienceSettings
    queue: QueueSettings

    @property
    def is_production(self) -> bool:
        """Check if the application is running in production.

        Returns:
            True if PREFIX is empty (production), False otherwise.
        """
        return not bool(self.PREFIX)

    def __init__(self, **kwargs):
        """Initialize Settings with automatic subsettings instantiation.

        Args:
            **kwargs: Optional overrides for specific settings sections.
        """
        settings_map = {
            # Integrations
            "folio": FolioSettings,
            "twilio": TwilioSettings,
            "sendgrid": SendGridSettings,
            # Infrastructure
            "resilience": ResilienceSettings,
            "queue": QueueSettings,
        }

        for setting_name, setting_class in settings_map.items():
            if setting_name not in kwargs:
                kwargs[setting_name] = setting_class()

        super().__init__(**kwargs)

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
        populate_by_name=True,
    )
