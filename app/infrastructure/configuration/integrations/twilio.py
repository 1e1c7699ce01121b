"""Twilio SMS integration settings."""

import re

from pydantic import Field, field_validator

from infrastructure.configuration.base import IntegrationSettings

E164_PATTERN = re.compile(r"^\+[1-9]\d{1,14}$")


class TwilioSettings(IntegrationSettings):
    """Twilio Programmable Messaging configuration.

    Environment Variables:
        TWILIO_ACCOUNT_SID: Account SID (basic auth user)
        TWILIO_AUTH_TOKEN: Auth token (basic auth password)
        TWILIO_NUMBER_FROM: Sender number in E.164 format
        TWILIO_API_URL: REST API base URL (default: https://api.twilio.com)
    """

    account_sid: str | None = Field(default=None, alias="TWILIO_ACCOUNT_SID")
    auth_token: str | None = Field(default=None, alias="TWILIO_AUTH_TOKEN")
    number_from: str | None = Field(default=None, alias="TWILIO_NUMBER_FROM")
    api_url: str = Field(default="https://api.twilio.com", alias="TWILIO_API_URL")

    @field_validator("number_from")
    @classmethod
    def validate_number_from(cls, v: str | None) -> str | None:
        """NumberFrom must be in E.164 format."""
        if not v:
            return None
        if not E164_PATTERN.match(v):
            raise ValueError(f"TWILIO_NUMBER_FROM must be in E.164 format: {v}")
        return v

    def validate_configured(self) -> None:
        self.require("account_sid", "auth_token", "number_from")
