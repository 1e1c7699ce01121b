"""Notification service for dependency injection.

Facade over the dispatcher (synchronous path) and the fire-and-forget
queue with its background consumer.
"""

from typing import Any, Dict, Iterable, List, Mapping, Optional, Type, TYPE_CHECKING

import httpx
import structlog
from pydantic import BaseModel

from infrastructure.notifications.background import NotificationBackgroundService
from infrastructure.notifications.channels.base import ChannelNotification
from infrastructure.notifications.channels.email import EmailChannel
from infrastructure.notifications.channels.sms import SmsChannel
from infrastructure.notifications.dispatcher import NotificationSender
from infrastructure.notifications.exceptions import NotificationQueueClosedError
from infrastructure.notifications.models import Notification
from infrastructure.notifications.queue import NotificationQueue
from infrastructure.notifications.rendering.base import TemplateRenderer
from infrastructure.notifications.validation import (
    BASE_SCHEMAS,
    SchemaNotificationValidator,
)
from infrastructure.resilience import (
    build_provider_policy,
    get_all_circuit_breaker_stats,
    get_open_circuit_breakers,
)

if TYPE_CHECKING:
    from infrastructure.configuration import Settings

logger = structlog.get_logger()


class NotificationService:
    """Class-based notification service.

    ``send`` awaits the whole pipeline and surfaces every failure.
    ``send_nowait`` enqueues and returns immediately; delivery failures of
    queued notifications are only logged by the background consumer.

    Usage:
        # Via dependency injection
        from infrastructure.services import NotificationServiceDep

        @router.post("/notify")
        async def notify(notification_service: NotificationServiceDep):
            notification_service.send_nowait(notification)

        # Direct instantiation
        service = NotificationService.from_settings(settings, renderers=[renderer])
        service.start()
        await service.send(notification)
        await service.stop()
    """

    def __init__(
        self,
        sender: NotificationSender,
        queue: Optional[NotificationQueue] = None,
        background: Optional[NotificationBackgroundService] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        drain_on_shutdown: bool = False,
        shutdown_timeout_seconds: Optional[float] = None,
    ):
        """Initialize notification service.

        Args:
            sender: Dispatcher used by both paths
            queue: Fire-and-forget queue (a new one when omitted)
            background: Consumer for the queue (a new one when omitted)
            http_client: HTTP client owned by the service and closed on stop
            drain_on_shutdown: Default ``drain`` for ``stop()``
            shutdown_timeout_seconds: Default ``timeout`` for ``stop()``
        """
        self.sender = sender
        self.queue = queue if queue is not None else NotificationQueue()
        self.background = (
            background
            if background is not None
            else NotificationBackgroundService(self.queue, sender)
        )
        self._http_client = http_client
        self.drain_on_shutdown = drain_on_shutdown
        self.shutdown_timeout_seconds = shutdown_timeout_seconds

    @classmethod
    def from_settings(
        cls,
        settings: "Settings",
        http_client: Optional[httpx.AsyncClient] = None,
        renderers: Iterable[TemplateRenderer] = (),
        schemas: Optional[Mapping[type, Type[BaseModel]]] = None,
    ) -> "NotificationService":
        """Wire provider clients, channels, renderers and the validator.

        Channels are registered SMS first, then email. A provider whose
        settings are incomplete fails here rather than on first send.

        Args:
            settings: Application settings
            http_client: Shared HTTP client; when omitted the service creates
                one and closes it on stop
            renderers: Renderers in registration order
            schemas: Extra validation schemas merged over the base rules

        Raises:
            ValueError: If a selected provider is missing required settings
        """
        owned_client = None
        if http_client is None:
            owned_client = http_client = httpx.AsyncClient(
                timeout=settings.resilience.timeout_seconds
            )

        channels = _build_channels(settings, http_client)
        validator = SchemaNotificationValidator({**BASE_SCHEMAS, **(schemas or {})})
        sender = NotificationSender(channels, renderers, validator)

        return cls(
            sender,
            http_client=owned_client,
            drain_on_shutdown=settings.queue.drain_on_shutdown,
            shutdown_timeout_seconds=settings.queue.shutdown_timeout_seconds,
        )

    async def send(self, notification: Notification) -> None:
        """Send and wait for delivery. Every failure propagates."""
        await self.sender.send(notification)

    def send_nowait(self, notification: Notification) -> None:
        """Queue a notification for background delivery and return at once."""
        try:
            self.queue.enqueue(notification)
        except NotificationQueueClosedError:
            logger.warning(
                "notification_dropped_queue_closed",
                notification_type=type(notification).__name__,
            )

    @property
    def accepting_queued(self) -> bool:
        """True while queued notifications have a consumer to deliver them."""
        return self.background.running and not self.queue.closed

    def start(self) -> None:
        """Start the background consumer."""
        self.background.start()

    async def stop(
        self, drain: Optional[bool] = None, timeout: Optional[float] = None
    ) -> None:
        """Stop the consumer and release the owned HTTP client."""
        try:
            await self.background.stop(
                drain=self.drain_on_shutdown if drain is None else drain,
                timeout=self.shutdown_timeout_seconds if timeout is None else timeout,
            )
        finally:
            if self._http_client is not None:
                await self._http_client.aclose()
                self._http_client = None

    def health_check(self) -> Dict[str, Any]:
        open_circuits = get_open_circuit_breakers()
        healthy = self.background.running and not open_circuits
        return {
            "status": "ok" if healthy else "degraded",
            "queue_depth": self.queue.qsize(),
            "queue_closed": self.queue.closed,
            "consumer_running": self.background.running,
            "processed": self.background.processed_count,
            "failed": self.background.failed_count,
            "channels": [c.channel_name for c in self.sender.channels],
            "open_circuits": open_circuits,
            "circuit_breakers": get_all_circuit_breaker_stats(),
        }


def _build_channels(
    settings: "Settings", http_client: httpx.AsyncClient
) -> List[ChannelNotification]:
    # Provider clients import the notification models, so they load here
    from integrations.folio import FolioSmsClient
    from integrations.sendgrid import SendGridEmailClient
    from integrations.twilio import TwilioSmsClient

    resilience = settings.resilience
    timeout = resilience.timeout_seconds
    channels: List[ChannelNotification] = []

    if settings.sms_provider == "folio":
        policy = build_provider_policy("folio_sms", resilience)
        channels.append(
            SmsChannel(FolioSmsClient(settings.folio, http_client, policy, timeout))
        )
    elif settings.sms_provider == "twilio":
        policy = build_provider_policy("twilio_sms", resilience)
        channels.append(
            SmsChannel(TwilioSmsClient(settings.twilio, http_client, policy, timeout))
        )

    if settings.email_provider == "sendgrid":
        policy = build_provider_policy("sendgrid_email", resilience)
        channels.append(
            EmailChannel(
                SendGridEmailClient(settings.sendgrid, http_client, policy, timeout)
            )
        )

    logger.info(
        "notification_channels_configured",
        sms_provider=settings.sms_provider,
        email_provider=settings.email_provider,
        channels=[c.channel_name for c in channels],
    )
    return channels
