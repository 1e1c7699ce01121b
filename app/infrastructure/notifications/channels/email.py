"""Email channel implementation."""

from typing import TYPE_CHECKING

import structlog
from infrastructure.notifications.channels.base import ChannelNotification
from infrastructure.notifications.models import (
    EmailMessage,
    EmailNotification,
    NotificationKind,
)

if TYPE_CHECKING:
    from integrations.protocols import EmailClient

logger = structlog.get_logger()


class EmailChannel(ChannelNotification[EmailNotification]):
    """Email notification channel.

    Sends the rendered HTML body with the notification's subject.
    """

    kind = NotificationKind.EMAIL

    def __init__(self, email_client: "EmailClient"):
        self._client = email_client
        logger.info(
            "initialized_email_channel",
            backend=getattr(email_client, "provider_name", type(email_client).__name__),
        )

    @property
    def channel_name(self) -> str:
        """Channel identifier."""
        return "email"

    async def send(self, notification: EmailNotification, content: str) -> None:
        await self._client.send(
            EmailMessage(
                to=notification.to.address,
                subject=notification.subject,
                content=content,
            )
        )
