"""In-memory fire-and-forget notification queue.

Many producers, one consumer. ``enqueue`` never suspends and may be called
from any thread; the consumer reads with ``read_all`` on the event loop the
queue was bound to. Entries are held in memory only.
"""

import asyncio
import threading
from collections import deque
from typing import AsyncIterator, Deque, Optional

import structlog
from infrastructure.notifications.exceptions import NotificationQueueClosedError
from infrastructure.notifications.models import Notification

logger = structlog.get_logger()


class NotificationQueue:
    """Unbounded FIFO queue of notifications awaiting background delivery.

    Entries live in a deque guarded by a thread lock, so every producer and
    ``close`` share one ordering. The consumer's loop is woken through
    ``call_soon_threadsafe`` when the producer runs on another thread.
    """

    def __init__(self):
        self._items: Deque[Notification] = deque()
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._wakeup = asyncio.Event()
        self._closed = False
        self._lock = threading.Lock()

    @property
    def closed(self) -> bool:
        return self._closed

    def qsize(self) -> int:
        """Number of notifications waiting to be read."""
        with self._lock:
            return len(self._items)

    def bind(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        """Bind the queue to the consumer's event loop."""
        loop = loop or asyncio.get_running_loop()
        with self._lock:
            self._loop = loop

    def _wake(self, loop: Optional[asyncio.AbstractEventLoop]) -> None:
        # Unbound: the consumer checks the deque before its first wait
        if loop is None or loop.is_closed():
            return
        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None

        if running is loop:
            self._wakeup.set()
        else:
            loop.call_soon_threadsafe(self._wakeup.set)

    def enqueue(self, notification: Notification) -> None:
        """Add a notification without waiting.

        Raises:
            NotificationQueueClosedError: If the queue has been closed
        """
        with self._lock:
            if self._closed:
                raise NotificationQueueClosedError(
                    f"Queue closed, cannot accept {type(notification).__name__}"
                )
            self._items.append(notification)
            loop = self._loop

        self._wake(loop)
        logger.debug(
            "notification_enqueued",
            notification_type=type(notification).__name__,
        )

    def close(self) -> None:
        """Stop accepting notifications. Already queued ones can still be read."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            pending = len(self._items)
            loop = self._loop

        self._wake(loop)
        logger.info("notification_queue_closed", pending=pending)

    async def read_all(self) -> AsyncIterator[Notification]:
        """Yield notifications in enqueue order until closed and drained."""
        if self._loop is None:
            self.bind()

        while True:
            with self._lock:
                if self._items:
                    item = self._items.popleft()
                elif self._closed:
                    return
                else:
                    item = None
                    self._wakeup.clear()

            if item is None:
                await self._wakeup.wait()
                continue
            yield item
