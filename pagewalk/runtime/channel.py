"""In-process chunk channel backed by an asyncio queue.

The producer side (a dispatcher) calls ``send``. The consumer side reads with
``receive`` or ``async for`` and cancels the stream with ``close``. The queue
is unbounded, so ``send`` never blocks the producer.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator

from ..core.exceptions import ChannelClosedError
from ..models import Item, StreamEvent

logger = logging.getLogger(__name__)


class ChunkChannel:
    """Single-producer, single-consumer channel of stream events."""

    def __init__(self) -> None:
        self._queue: asyncio.Queue[StreamEvent | None] = asyncio.Queue()
        self._closed = False
        self._error: BaseException | None = None

    @property
    def closed(self) -> bool:
        return self._closed

    async def send(self, event: StreamEvent) -> None:
        """Queue an event for the consumer.

        Raises:
            ChannelClosedError: If the consumer closed the channel
        """
        if self._closed:
            raise ChannelClosedError("Chunk channel closed by consumer")
        self._queue.put_nowait(event)

    def close(self) -> None:
        """Close the channel from the consumer side.

        The producer notices at its next send or cancellation checkpoint.
        """
        if not self._closed:
            self._closed = True
            logger.debug("Chunk channel closed")

    def abort(self, error: BaseException) -> None:
        """Wake the consumer with ``error`` because the producer died."""
        self._error = error
        self._queue.put_nowait(None)

    async def receive(self) -> StreamEvent:
        """Wait for the next event.

        Raises:
            Exception: Whatever ended the producer before completion
        """
        event = await self._queue.get()
        if event is None:
            # Keep the abort marker queued for any later receive
            self._queue.put_nowait(None)
            raise self._error or ChannelClosedError("Chunk channel aborted")
        return event

    async def __aiter__(self) -> AsyncIterator[StreamEvent]:
        """Yield chunk events until the completion event arrives."""
        while True:
            event = await self.receive()
            if event.is_completed:
                return
            yield event

    async def collect(self) -> list[Item]:
        """Drain the stream and return every streamed item in order."""
        items: list[Item] = []
        async for event in self:
            items.extend(event.items)
        return items
