"""Welcome notification variants."""

from dataclasses import dataclass
from typing import ClassVar

from infrastructure.notifications.models import EmailNotification, SmsNotification


@dataclass(frozen=True)
class WelcomeSmsNotification(SmsNotification):
    """Welcome text message with a free-form message appended to the greeting."""

    template_name: ClassVar[str] = "welcome_sms"

    message: str = ""


@dataclass(frozen=True)
class WelcomeEmailNotification(EmailNotification):
    """Welcome email rendered as HTML."""

    template_name: ClassVar[str] = "welcome_email"
