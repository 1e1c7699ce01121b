"""Unit tests for NotificationQueue."""

import asyncio
import threading

import pytest

from infrastructure.notifications.exceptions import NotificationQueueClosedError
from infrastructure.notifications.queue import NotificationQueue
from tests.factories.notifications import make_welcome_sms


async def _collect(queue: NotificationQueue) -> list:
    return [item async for item in queue.read_all()]


@pytest.mark.unit
class TestNotificationQueue:
    @pytest.mark.asyncio
    async def test_reads_in_enqueue_order(self):
        queue = NotificationQueue()
        notifications = [make_welcome_sms(message=str(i)) for i in range(5)]

        for notification in notifications:
            queue.enqueue(notification)
        queue.close()

        assert await _collect(queue) == notifications

    @pytest.mark.asyncio
    async def test_qsize_counts_pending_after_close(self):
        queue = NotificationQueue()
        queue.enqueue(make_welcome_sms())
        queue.enqueue(make_welcome_sms())

        assert queue.qsize() == 2
        queue.close()
        assert queue.qsize() == 2

    @pytest.mark.asyncio
    async def test_enqueue_after_close_raises(self):
        queue = NotificationQueue()
        queue.close()

        with pytest.raises(NotificationQueueClosedError):
            queue.enqueue(make_welcome_sms())

        assert queue.closed is True

    @pytest.mark.asyncio
    async def test_close_is_idempotent(self):
        queue = NotificationQueue()
        queue.enqueue(make_welcome_sms())
        queue.close()
        queue.close()

        assert len(await _collect(queue)) == 1

    @pytest.mark.asyncio
    async def test_reader_waits_for_items(self):
        queue = NotificationQueue()
        queue.bind()
        reader = asyncio.create_task(_collect(queue))
        await asyncio.sleep(0)

        notification = make_welcome_sms()
        queue.enqueue(notification)
        queue.close()

        assert await asyncio.wait_for(reader, timeout=1) == [notification]

    @pytest.mark.asyncio
    async def test_enqueue_from_another_thread(self):
        queue = NotificationQueue()
        queue.bind()
        notification = make_welcome_sms()

        producer = threading.Thread(target=queue.enqueue, args=(notification,))
        producer.start()
        producer.join()
        queue.close()

        assert await asyncio.wait_for(_collect(queue), timeout=1) == [notification]

    def test_enqueue_without_running_loop(self):
        queue = NotificationQueue()

        queue.enqueue(make_welcome_sms())

        assert queue.qsize() == 1

    @pytest.mark.asyncio
    async def test_enqueue_and_close_on_unbound_queue_inside_loop(self):
        queue = NotificationQueue()
        notification = make_welcome_sms()

        queue.enqueue(notification)
        queue.close()

        assert queue.qsize() == 1
        assert await asyncio.wait_for(_collect(queue), timeout=1) == [notification]

    @pytest.mark.asyncio
    async def test_close_wakes_waiting_reader(self):
        queue = NotificationQueue()
        reader = asyncio.create_task(_collect(queue))
        await asyncio.sleep(0)

        queue.close()

        assert await asyncio.wait_for(reader, timeout=1) == []

    @pytest.mark.asyncio
    async def test_mixed_thread_and_loop_producers_keep_order(self):
        queue = NotificationQueue()
        queue.bind()
        first, second, third = (make_welcome_sms(message=m) for m in "ABC")

        producer = threading.Thread(target=queue.enqueue, args=(first,))
        producer.start()
        producer.join()
        queue.enqueue(second)
        producer = threading.Thread(target=queue.enqueue, args=(third,))
        producer.start()
        producer.join()
        queue.close()

        assert await asyncio.wait_for(_collect(queue), timeout=1) == [
            first,
            second,
            third,
        ]

    @pytest.mark.asyncio
    async def test_close_racing_thread_producer_loses_nothing_accepted(self):
        queue = NotificationQueue()
        queue.bind()
        accepted = []
        started = threading.Event()

        def produce():
            for i in range(500):
                notification = make_welcome_sms(message=str(i))
                try:
                    queue.enqueue(notification)
                except NotificationQueueClosedError:
                    return
                accepted.append(notification)
                started.set()

        producer = threading.Thread(target=produce)
        producer.start()
        started.wait(timeout=1)
        queue.close()
        producer.join()

        assert await asyncio.wait_for(_collect(queue), timeout=1) == accepted

    @pytest.mark.asyncio
    async def test_thread_producer_wakes_waiting_reader(self):
        queue = NotificationQueue()
        reader = asyncio.create_task(_collect(queue))
        await asyncio.sleep(0)
        notification = make_welcome_sms()

        producer = threading.Thread(target=queue.enqueue, args=(notification,))
        producer.start()
        producer.join()
        await asyncio.sleep(0.01)
        queue.close()

        assert await asyncio.wait_for(reader, timeout=1) == [notification]
