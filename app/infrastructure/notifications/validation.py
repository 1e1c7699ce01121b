"""Notification validation before any rendering or network I/O.

Validation rules are pydantic models registered per notification class.
The validator picks the schema registered for the nearest class in the
notification's MRO, so a feature variant inherits the SMS or email base
rules unless it registers a stricter schema of its own.

Usage:
    validator = SchemaNotificationValidator(
        {**BASE_SCHEMAS, WelcomeSmsNotification: WelcomeSmsSchema}
    )
    await validator.validate(notification)  # raises NotificationValidationError
"""

import dataclasses
import re
from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping, Optional, Type

import structlog
from pydantic import BaseModel, ConfigDict, EmailStr, Field, ValidationError, field_validator

from infrastructure.notifications.exceptions import (
    NotificationValidationError,
    ValidationFailure,
)
from infrastructure.notifications.models import (
    EmailNotification,
    Notification,
    SmsNotification,
)
from infrastructure.notifications.value_objects import EmailAddress, PhoneNumber

logger = structlog.get_logger()

E164_PATTERN = r"^\+?[1-9]\d{1,14}$"
# Language with optional region or script subtags: "en", "fr-CA", "zh-Hant-TW"
LOCALE_PATTERN = r"^[A-Za-z]{2,3}([-_][A-Za-z0-9]{2,8})*$"


class NotificationValidator(ABC):
    """Pass/fail validation contract used by the dispatcher."""

    @abstractmethod
    async def validate(self, notification: Notification) -> None:
        """Validate a notification.

        Raises:
            NotificationValidationError: Listing every violated rule
        """


class NotificationSchema(BaseModel):
    """Rules shared by every notification."""

    model_config = ConfigDict(extra="ignore")

    locale: str = Field(min_length=1)

    @field_validator("locale")
    @classmethod
    def validate_locale(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Locale is required")
        if not re.match(LOCALE_PATTERN, v):
            raise ValueError(f"Locale {v!r} is not a language tag such as 'fr-CA'")
        return v


class SmsNotificationSchema(NotificationSchema):
    phone_number: str = Field(pattern=E164_PATTERN)


class EmailNotificationSchema(NotificationSchema):
    to: EmailStr
    subject: str = Field(min_length=1, max_length=200)

    @field_validator("subject")
    @classmethod
    def validate_subject(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Subject is required")
        return v


BASE_SCHEMAS: Dict[type, Type[BaseModel]] = {
    SmsNotification: SmsNotificationSchema,
    EmailNotification: EmailNotificationSchema,
}


def _field_values(notification: Notification) -> dict[str, Any]:
    values = {}
    for f in dataclasses.fields(notification):
        value = getattr(notification, f.name, None)
        if isinstance(value, (PhoneNumber, EmailAddress)):
            value = str(value)
        values[f.name] = value
    return values


class SchemaNotificationValidator(NotificationValidator):
    """Validates notifications against an explicit class-to-schema mapping.

    Args:
        schemas: Mapping of notification class to pydantic model. Defaults to
            the SMS and email base rules.
    """

    def __init__(self, schemas: Optional[Mapping[type, Type[BaseModel]]] = None):
        self.schemas: Dict[type, Type[BaseModel]] = dict(
            BASE_SCHEMAS if schemas is None else schemas
        )

    def schema_for(self, notification: Notification) -> Optional[Type[BaseModel]]:
        for cls in type(notification).__mro__:
            if cls in self.schemas:
                return self.schemas[cls]
        return None

    async def validate(self, notification: Notification) -> None:
        schema = self.schema_for(notification)
        if schema is None:
            return

        try:
            schema.model_validate(_field_values(notification))
        except ValidationError as e:
            failures = [
                ValidationFailure(
                    field=".".join(str(part) for part in error["loc"]) or "__root__",
                    message=error["msg"],
                )
                for error in e.errors()
            ]
            logger.info(
                "notification_validation_failed",
                notification_type=notification.notification_type,
                fields=[f.field for f in failures],
            )
            raise NotificationValidationError(failures) from e
