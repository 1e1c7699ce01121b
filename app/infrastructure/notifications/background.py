"""Background consumer draining the fire-and-forget queue.

A single asyncio task reads the NotificationQueue and hands each
notification to the NotificationSender, one at a time and in order. A
failing notification is logged and dropped; it never stops the consumer.
"""

import asyncio
from typing import Optional

import structlog
from infrastructure.logging.context import bind_request_context
from infrastructure.notifications.dispatcher import NotificationSender
from infrastructure.notifications.queue import NotificationQueue
from infrastructure.notifications.snapshot import notification_snapshot

logger = structlog.get_logger()


class NotificationBackgroundService:
    """Owns the consumer task for a NotificationQueue.

    Attributes:
        queue: Queue to drain
        sender: Dispatcher every queued notification goes through
        processed_count: Notifications delivered successfully
        failed_count: Notifications whose delivery raised
    """

    def __init__(self, queue: NotificationQueue, sender: NotificationSender):
        self.queue = queue
        self.sender = sender
        self.processed_count = 0
        self.failed_count = 0
        self._task: Optional[asyncio.Task] = None
        self._stopping = False
        self._drain = False

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Start the consumer task on the running event loop."""
        if self.running:
            return
        self.queue.bind()
        self._stopping = False
        self._task = asyncio.create_task(
            self._consume(), name="notification-background-consumer"
        )
        logger.info("notification_consumer_started")

    async def stop(self, drain: bool = False, timeout: Optional[float] = None) -> None:
        """Close the queue and wait for the consumer to finish.

        Args:
            drain: Deliver everything queued before the close; otherwise stop
                after the notification currently being processed
            timeout: Seconds to wait before cancelling the consumer task
        """
        self._drain = drain
        self._stopping = True
        self.queue.close()

        task = self._task
        if task is None:
            return

        try:
            await asyncio.wait_for(asyncio.shield(task), timeout=timeout)
        except asyncio.TimeoutError:
            logger.warning(
                "notification_consumer_stop_timeout",
                timeout_seconds=timeout,
                pending=self.queue.qsize(),
            )
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass

        logger.info(
            "notification_consumer_stopped",
            drained=drain,
            abandoned=self.queue.qsize(),
            processed=self.processed_count,
            failed=self.failed_count,
        )

    async def _consume(self) -> None:
        async for notification in self.queue.read_all():
            await self._process(notification)
            if self._stopping and not self._drain:
                break

    async def _process(self, notification) -> None:
        notification_type = type(notification).__name__
        with bind_request_context(notification_type=notification_type):
            try:
                await self.sender.send(notification)
            except Exception as e:
                self.failed_count += 1
                logger.error(
                    "queued_notification_failed",
                    notification_type=notification_type,
                    notification=notification_snapshot(notification),
                    error=str(e),
                    error_type=type(e).__name__,
                )
            else:
                self.processed_count += 1
