"""SendGrid email integration settings."""

import re

from pydantic import Field, field_validator

from infrastructure.configuration.base import IntegrationSettings

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class SendGridSettings(IntegrationSettings):
    """SendGrid v3 Mail Send configuration.

    Environment Variables:
        SENDGRID_API_KEY: API key sent as a bearer token
        SENDGRID_FROM_EMAIL: Sender address
        SENDGRID_FROM_NAME: Sender display name (max 100 characters)
        SENDGRID_API_URL: API base URL (default: https://api.sendgrid.com)
    """

    api_key: str | None = Field(default=None, alias="SENDGRID_API_KEY")
    from_email: str | None = Field(default=None, alias="SENDGRID_FROM_EMAIL")
    from_name: str | None = Field(default=None, alias="SENDGRID_FROM_NAME")
    api_url: str = Field(default="https://api.sendgrid.com", alias="SENDGRID_API_URL")

    @field_validator("from_email")
    @classmethod
    def validate_from_email(cls, v: str | None) -> str | None:
        if not v:
            return None
        if not _EMAIL_PATTERN.match(v.strip()):
            raise ValueError(f"SENDGRID_FROM_EMAIL must be a valid email address: {v}")
        return v.strip()

    @field_validator("from_name")
    @classmethod
    def validate_from_name(cls, v: str | None) -> str | None:
        if v and len(v) > 100:
            raise ValueError("SENDGRID_FROM_NAME cannot exceed 100 characters")
        return v

    def validate_configured(self) -> None:
        self.require("api_key", "from_email", "from_name")
