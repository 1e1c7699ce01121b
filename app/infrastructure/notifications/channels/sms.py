"""SMS channel implementation."""

from typing import TYPE_CHECKING

import structlog
from infrastructure.notifications.channels.base import ChannelNotification
from infrastructure.notifications.models import (
    NotificationKind,
    SmsMessage,
    SmsNotification,
)

if TYPE_CHECKING:
    from integrations.protocols import SmsClient

logger = structlog.get_logger()


class SmsChannel(ChannelNotification[SmsNotification]):
    """SMS notification channel.

    Hands the canonical phone number and rendered content to the configured
    SMS client (Folio or Twilio).
    """

    kind = NotificationKind.SMS

    def __init__(self, sms_client: "SmsClient"):
        self._client = sms_client
        logger.info(
            "initialized_sms_channel",
            backend=getattr(sms_client, "provider_name", type(sms_client).__name__),
        )

    @property
    def channel_name(self) -> str:
        """Channel identifier."""
        return "sms"

    async def send(self, notification: SmsNotification, content: str) -> None:
        await self._client.send(
            SmsMessage(phone_number=notification.phone_number.full_number, content=content)
        )
