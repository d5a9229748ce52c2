import asyncio
import logging
from collections.abc import AsyncIterator

from smarthome.ports.notifier import DeviceChanged

logger = logging.getLogger(__name__)

DEFAULT_QUEUE_SIZE = 32


class QueueBroadcastNotifier:
    def __init__(self, queue_size: int = DEFAULT_QUEUE_SIZE) -> None:
        self._queue_size = queue_size
        self._subscribers: set[asyncio.Queue[DeviceChanged]] = set()

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def notify_device_changed(self) -> None:
        event = DeviceChanged()
        for queue in list(self._subscribers):
            try:
                queue.put_nowait(event)
            except asyncio.QueueFull:
                logger.warning("Observer queue full, dropping %s", event.name)
        logger.debug("Broadcast %s to %d observers", event.name, len(self._subscribers))

    async def subscribe(self) -> AsyncIterator[DeviceChanged]:
        queue: asyncio.Queue[DeviceChanged] = asyncio.Queue(maxsize=self._queue_size)
        self._subscribers.add(queue)
        try:
            while True:
                yield await queue.get()
        finally:
            self._subscribers.discard(queue)
