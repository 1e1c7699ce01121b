"""Notification dispatcher: validate, render and send through one channel.

Usage Example:
    from infrastructure.notifications import (
        NotificationSender,
        SchemaNotificationValidator,
        SmsChannel,
    )

    sender = NotificationSender(
        channels=[SmsChannel(folio_client), EmailChannel(sendgrid_client)],
        renderers=[welcome_renderer],
        validator=SchemaNotificationValidator(),
    )

    await sender.send(notification)
"""

from typing import Iterable, Optional, Sequence

import structlog
from infrastructure.notifications.channels.base import ChannelNotification
from infrastructure.notifications.exceptions import (
    NoChannelRegisteredError,
    NoRendererRegisteredError,
)
from infrastructure.notifications.models import Notification
from infrastructure.notifications.rendering.base import TemplateRenderer
from infrastructure.notifications.snapshot import notification_snapshot
from infrastructure.notifications.validation import NotificationValidator

logger = structlog.get_logger()


class NotificationSender:
    """Single-channel notification dispatcher.

    Channels and renderers are ordered and fixed at construction. For each
    notification the first channel whose ``can_handle`` is True and the first
    renderer whose ``can_render`` is True are used; later matches are ignored.

    Process:
    1. Select the channel (NoChannelRegisteredError if none)
    2. Validate (NotificationValidationError, before any rendering or I/O)
    3. Select the renderer (NoRendererRegisteredError if none)
    4. Render the content
    5. Send through the channel
    6. Log ``notification_sent`` or ``notification_send_failed`` with a
       snapshot of the notification

    Every error propagates to the caller; nothing is retried here. Provider
    retries happen inside the provider client's resilience policy.

    Attributes:
        channels: Registered channels in registration order
        renderers: Registered renderers in registration order
        validator: Validator run before rendering
    """

    def __init__(
        self,
        channels: Iterable[ChannelNotification],
        renderers: Iterable[TemplateRenderer],
        validator: NotificationValidator,
    ):
        self.channels: Sequence[ChannelNotification] = tuple(channels)
        self.renderers: Sequence[TemplateRenderer] = tuple(renderers)
        self.validator = validator

        logger.info(
            "initialized_notification_sender",
            channels=[c.channel_name for c in self.channels],
            renderers=[type(r).__name__ for r in self.renderers],
        )

    def select_channel(self, notification: Notification) -> Optional[ChannelNotification]:
        for channel in self.channels:
            if channel.can_handle(notification):
                return channel
        return None

    def select_renderer(self, notification: Notification) -> Optional[TemplateRenderer]:
        for renderer in self.renderers:
            if renderer.can_render(notification):
                return renderer
        return None

    async def send(self, notification: Notification) -> None:
        """Send one notification and wait for the provider call to finish.

        Args:
            notification: Notification to send

        Raises:
            NoChannelRegisteredError: No channel handles the notification
            NotificationValidationError: The notification violates its rules
            NoRendererRegisteredError: No renderer handles the notification
            ProviderError, httpx.HTTPError, CircuitBreakerOpenError: Provider
                failures, after the provider's retries
        """
        notification_type = type(notification).__name__

        channel = self.select_channel(notification)
        if channel is None:
            logger.error("no_channel_registered", notification_type=notification_type)
            raise NoChannelRegisteredError(notification_type)

        await self.validator.validate(notification)

        renderer = self.select_renderer(notification)
        if renderer is None:
            logger.error("no_renderer_registered", notification_type=notification_type)
            raise NoRendererRegisteredError(notification_type)

        content = await renderer.render(notification)

        try:
            await channel.send_notification(notification, content)
        except Exception as e:
            logger.error(
                "notification_send_failed",
                channel=channel.channel_name,
                notification_type=notification_type,
                notification=notification_snapshot(notification),
                error=str(e),
                error_type=type(e).__name__,
            )
            raise

        logger.info(
            "notification_sent",
            channel=channel.channel_name,
            notification_type=notification_type,
            notification=notification_snapshot(notification),
        )
