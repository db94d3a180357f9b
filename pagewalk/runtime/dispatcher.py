"""Streaming dispatch of filtered page chunks.

The ChunkDispatcher pulls pages from a PageWalker and forwards each page's
eligible items to a sink as soon as the page arrives, instead of
aggregating them.

Architecture:
    - One page in, one CHUNK event out. Chunk boundaries follow page
      boundaries and no cross-page deduplication is done.
    - A page filtered down to nothing still produces a (empty) CHUNK event.
    - End of stream is a distinct COMPLETED event.
    - The inter-chunk delay is a cancellation checkpoint: a sink closed by
      its consumer stops the dispatcher there, without a COMPLETED event.
"""

from __future__ import annotations

import asyncio
import logging

from ..core.config import DEFAULT_INTER_CHUNK_DELAY, PagingConfig
from ..core.exceptions import ChannelClosedError
from ..core.protocols import ChunkSink, CredentialProvider, PageFetcher
from ..filters import filter_eligible
from ..models import StreamEvent
from .channel import ChunkChannel
from .telemetry import log_chunk_dispatched
from .walker import PageWalker

logger = logging.getLogger(__name__)


class ChunkDispatcher:
    """Forwards each page's eligible items to a sink."""

    def __init__(
        self,
        walker: PageWalker,
        sink: ChunkSink,
        *,
        inter_chunk_delay: float = DEFAULT_INTER_CHUNK_DELAY,
    ) -> None:
        """Initialize dispatcher.

        Args:
            walker: Walker driving this stream; owned for the whole run
            sink: Consumer channel
            inter_chunk_delay: Seconds to pause between chunks
        """
        self._walker = walker
        self._sink = sink
        self._delay = inter_chunk_delay
        self._items_sent = 0

    @property
    def items_sent(self) -> int:
        return self._items_sent

    async def run(self) -> None:
        """Stream chunks until the walk ends or the sink is closed.

        Raises:
            FetchError: If the very first page fails (nothing is sent)
        """
        while True:
            page = await self._walker.next_page()
            if page is None:
                break

            if self._sink.closed:
                self._log_cancelled()
                return

            chunk = filter_eligible(page.items)
            page_index = self._walker.pages_fetched - 1
            try:
                await self._sink.send(StreamEvent.chunk(chunk, page_index=page_index))
            except ChannelClosedError:
                self._log_cancelled()
                return

            self._items_sent += len(chunk)
            log_chunk_dispatched(
                walk_id=self._walker.walk_id,
                page_index=page_index,
                items=len(chunk),
                dropped=len(page.items) - len(chunk),
            )

            if page.is_last:
                break

            await asyncio.sleep(self._delay)
            if self._sink.closed:
                self._log_cancelled()
                return

        try:
            await self._sink.send(
                StreamEvent.completed(self._items_sent, pages=self._walker.pages_fetched)
            )
        except ChannelClosedError:
            self._log_cancelled()
            return

        logger.info(
            f"Stream {self._walker.walk_id} completed: {self._items_sent} items "
            f"from {self._walker.pages_fetched} pages"
        )

    def _log_cancelled(self) -> None:
        logger.info(
            f"Stream {self._walker.walk_id} cancelled by consumer after "
            f"{self._walker.pages_fetched} pages"
        )


async def stream_chunks(
    fetcher: PageFetcher,
    credentials: CredentialProvider,
    sink: ChunkSink,
    *,
    start_cursor: str | None = None,
    config: PagingConfig | None = None,
) -> None:
    """Stream eligible items page by page into ``sink``.

    Args:
        fetcher: Page fetcher for the listing
        credentials: Credential provider
        sink: Consumer channel receiving CHUNK events then one COMPLETED event
        start_cursor: Cursor to start from (None = first page)
        config: Paging configuration (defaults apply if omitted)

    Raises:
        AuthFailedError: Credential unavailable on the first page
        RequestFailedError: First page request failed
        DecodeFailedError: First page payload undecodable
    """
    config = config or PagingConfig()
    walker = PageWalker(
        fetcher,
        credentials,
        start_cursor=start_cursor,
        retry_policy=config.retry_policy,
        page_size=config.page_size_hint,
    )
    dispatcher = ChunkDispatcher(walker, sink, inter_chunk_delay=config.inter_chunk_delay)
    await dispatcher.run()


def open_stream(
    fetcher: PageFetcher,
    credentials: CredentialProvider,
    *,
    start_cursor: str | None = None,
    config: PagingConfig | None = None,
) -> tuple[asyncio.Task[None], ChunkChannel]:
    """Start ``stream_chunks`` on its own task and return it with its channel.

    If the task fails or is cancelled before completing, a consumer blocked on
    the channel is woken with the error (``ChannelClosedError`` on cancel).
    Must be called from a running event loop.
    """
    channel = ChunkChannel()
    task = asyncio.create_task(
        stream_chunks(fetcher, credentials, channel, start_cursor=start_cursor, config=config)
    )

    def _on_done(t: asyncio.Task[None]) -> None:
        if t.cancelled():
            channel.abort(ChannelClosedError("Stream task cancelled"))
        elif t.exception() is not None:
            channel.abort(t.exception())

    task.add_done_callback(_on_done)
    return task, channel
