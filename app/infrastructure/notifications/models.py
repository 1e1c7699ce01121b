"""Notification system core models.

Notifications are frozen dataclasses tagged with a NotificationKind.
Channels select on the tag, renderers select on ``template_name``, and
features subclass the SMS or email variant to add their own content.

Example:
    @dataclass(frozen=True)
    class PasswordResetSms(SmsNotification):
        template_name: ClassVar[str] = "password_reset_sms"
        code: str = ""

    notification = PasswordResetSms(
        locale="fr-CA",
        phone_number=PhoneNumber("1", "581", "5551234"),
        code="123456",
    )
"""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar

from infrastructure.notifications.value_objects import EmailAddress, PhoneNumber


class NotificationKind(Enum):
    """Delivery kind a notification belongs to."""

    SMS = "sms"
    EMAIL = "email"


@dataclass(frozen=True)
class Notification:
    """Base notification.

    Attributes:
        locale: Culture identifier such as "en-CA" or "fr"
        template_name: Renderer selector key, set by each concrete variant
        kind: Delivery kind tag, set by the SMS and email variants
    """

    kind: ClassVar[NotificationKind]
    template_name: ClassVar[str] = ""

    locale: str

    @property
    def language(self) -> str:
        """Language part of the locale ("fr-CA" -> "fr")."""
        return (self.locale or "").replace("_", "-").split("-")[0].lower()

    @property
    def notification_type(self) -> str:
        return type(self).__name__


@dataclass(frozen=True)
class SmsNotification(Notification):
    kind: ClassVar[NotificationKind] = NotificationKind.SMS

    phone_number: PhoneNumber


@dataclass(frozen=True)
class EmailNotification(Notification):
    kind: ClassVar[NotificationKind] = NotificationKind.EMAIL

    to: EmailAddress
    subject: str


@dataclass(frozen=True)
class SmsMessage:
    """Provider-facing SMS: canonical phone number and rendered content."""

    phone_number: str
    content: str


@dataclass(frozen=True)
class EmailMessage:
    """Provider-facing email: address, subject and rendered HTML content."""

    to: str
    subject: str
    content: str
