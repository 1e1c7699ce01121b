"""Notification channel abstract base class.

All channel implementations (SMS, Email) must implement this interface.
"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

import structlog
from infrastructure.notifications.exceptions import ChannelMismatchError
from infrastructure.notifications.models import Notification, NotificationKind

logger = structlog.get_logger()

N = TypeVar("N", bound=Notification)


class ChannelNotification(ABC, Generic[N]):
    """Abstract base class for notification channels.

    Each channel delivers one notification kind through one provider client:
    - SmsChannel: SmsNotification via Folio or Twilio
    - EmailChannel: EmailNotification via SendGrid

    Selection is a tag match on ``notification.kind``; the dispatcher uses the
    first registered channel that can handle a notification.

    Example Implementation:
        class PushChannel(ChannelNotification[PushNotification]):
            kind = NotificationKind.PUSH

            @property
            def channel_name(self) -> str:
                return "push"

            async def send(self, notification, content):
                await self._client.send(PushMessage(notification.device, content))
    """

    kind: NotificationKind

    @property
    @abstractmethod
    def channel_name(self) -> str:
        """Channel identifier used in logs."""

    def can_handle(self, notification: Notification) -> bool:
        """Check the notification's kind tag. Pure, never raises."""
        return getattr(notification, "kind", None) is self.kind

    async def send_notification(self, notification: Notification, rendered_content: str) -> None:
        """Send rendered content for a notification this channel handles.

        Provider errors propagate unchanged.

        Raises:
            ChannelMismatchError: If ``can_handle`` is False for the notification
        """
        if not self.can_handle(notification):
            logger.error(
                "channel_mismatch",
                channel=self.channel_name,
                notification_type=type(notification).__name__,
            )
            raise ChannelMismatchError(self.channel_name, type(notification).__name__)

        await self.send(notification, rendered_content)  # type: ignore[arg-type]

    @abstractmethod
    async def send(self, notification: N, content: str) -> None:
        """Perform exactly one provider call for the notification."""
