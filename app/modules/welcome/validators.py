"""Validation schemas for welcome notifications."""

from pydantic import field_validator

from infrastructure.notifications.validation import SmsNotificationSchema
from modules.welcome.notifications import WelcomeSmsNotification


class WelcomeSmsSchema(SmsNotificationSchema):
    message: str

    @field_validator("message")
    @classmethod
    def validate_message(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Message is required")
        return v


# Welcome emails use the base email rules
WELCOME_SCHEMAS = {
    WelcomeSmsNotification: WelcomeSmsSchema,
}
