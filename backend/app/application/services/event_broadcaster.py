"""In-process broadcaster pushing knowledge-store change events to SSE clients."""

import asyncio
import json
import logging
from collections.abc import AsyncGenerator
from typing import Any

logger = logging.getLogger(__name__)


class KnowledgeEventBroadcaster:
    """Fans change notifications out to every connected client.

    Each subscriber gets its own bounded asyncio.Queue. Broadcasting is
    fire-and-forget: a subscriber whose queue is full is disconnected
    rather than slowing down the request that produced the event.
    """

    def __init__(self, queue_size: int = 100) -> None:
        self._queue_size = queue_size
        self._queues: list[asyncio.Queue[str | None]] = []

    async def subscribe(self) -> AsyncGenerator[str, None]:
        """Yield formatted SSE messages until the client goes away or we shut down."""
        queue: asyncio.Queue[str | None] = asyncio.Queue(maxsize=self._queue_size)
        self._queues.append(queue)
        try:
            while True:
                event = await queue.get()
                if event is None:
                    break
                yield event
        finally:
            if queue in self._queues:
                self._queues.remove(queue)

    async def broadcast(self, event_type: str, data: dict[str, Any]) -> None:
        message = f"event: {event_type}\ndata: {json.dumps(data, default=str)}\n\n"
        dead_queues: list[asyncio.Queue[str | None]] = []

        for queue in self._queues:
            try:
                queue.put_nowait(message)
            except asyncio.QueueFull:
                dead_queues.append(queue)
                logger.warning("Knowledge event subscriber queue full — disconnecting")

        for queue in dead_queues:
            self._queues.remove(queue)
            _drain_and_close(queue)

        logger.debug("Broadcast %s to %d subscriber(s)", event_type, len(self._queues))

    async def shutdown(self) -> None:
        """Disconnect all subscribers."""
        for queue in self._queues:
            _drain_and_close(queue)
        self._queues.clear()

    @property
    def client_count(self) -> int:
        return len(self._queues)


def _drain_and_close(queue: asyncio.Queue[str | None]) -> None:
    """Make room for the close sentinel on a possibly full queue."""
    while not queue.empty():
        queue.get_nowait()
    queue.put_nowait(None)


class PendingEvents:
    """Holds the events of one unit of work until it has committed.

    Services broadcast into it as they would into the broadcaster. Whoever
    owns the unit of work calls ``publish()`` after a successful commit; a
    failed one simply drops the buffer.
    """

    def __init__(self, broadcaster: KnowledgeEventBroadcaster) -> None:
        self._broadcaster = broadcaster
        self._events: list[tuple[str, dict[str, Any]]] = []

    async def broadcast(self, event_type: str, data: dict[str, Any]) -> None:
        self._events.append((event_type, data))

    async def publish(self) -> None:
        events, self._events = self._events, []
        for event_type, data in events:
            await self._broadcaster.broadcast(event_type, data)

    def __len__(self) -> int:
        return len(self._events)
