"""Unit tests for streaming chunk dispatch."""

from __future__ import annotations

import asyncio
from typing import Any

import pytest

from pagewalk.core import (
    ChannelClosedError,
    PagingConfig,
    RequestFailedError,
    StreamEventKind,
    TransportError,
)
from pagewalk.models import Page, StreamEvent
from pagewalk.runtime import ChunkChannel, ChunkDispatcher, PageWalker, open_stream, stream_chunks

NO_DELAY = PagingConfig(inter_chunk_delay=0)


class RecordingSink:
    """Sink that records events and can close itself after N sends."""

    def __init__(self, close_after: int | None = None) -> None:
        self.events: list[StreamEvent] = []
        self.close_after = close_after
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def send(self, event: StreamEvent) -> None:
        if self._closed:
            raise ChannelClosedError("closed")
        self.events.append(event)
        if self.close_after is not None and len(self.events) >= self.close_after:
            self._closed = True

    def ids(self) -> list[Any]:
        return [[i.id for i in e.items] for e in self.events]


class TestStreamChunks:
    """Test chunk boundaries and the completion event."""

    @pytest.mark.asyncio
    async def test_three_page_scenario(self, three_page_source, credentials):
        sink = RecordingSink()

        await stream_chunks(three_page_source, credentials, sink, config=NO_DELAY)

        kinds = [e.kind for e in sink.events]
        assert kinds == [
            StreamEventKind.CHUNK,
            StreamEventKind.CHUNK,
            StreamEventKind.CHUNK,
            StreamEventKind.COMPLETED,
        ]
        assert sink.ids()[:3] == [[1, 2], [], [5, 6]]
        # The filtered-out page is an empty chunk, not the end of the stream
        assert not sink.events[1].is_completed
        assert sink.events[-1].is_completed
        assert sink.events[-1].total_items == 4
        assert [e.page_index for e in sink.events[:3]] == [0, 1, 2]

    @pytest.mark.asyncio
    async def test_no_cross_page_dedup(self, make_fetcher, credentials, item):
        sink = RecordingSink()
        fetcher = make_fetcher([item(1), item(2)], [item(2), item(3)])

        await stream_chunks(fetcher, credentials, sink, config=NO_DELAY)

        assert sink.ids()[:2] == [[1, 2], [2, 3]]

    @pytest.mark.asyncio
    async def test_first_page_failure_sends_nothing(self, make_fetcher, credentials):
        sink = RecordingSink()
        fetcher = make_fetcher(entries=[TransportError("down", status_code=500)])

        with pytest.raises(RequestFailedError):
            await stream_chunks(fetcher, credentials, sink, config=NO_DELAY)

        assert sink.events == []

    @pytest.mark.asyncio
    async def test_later_failure_sends_completion(self, make_fetcher, credentials, item):
        sink = RecordingSink()
        fetcher = make_fetcher(
            entries=[Page(items=[item(1)], continuation="cursor-1"), TransportError("down")]
        )

        await stream_chunks(fetcher, credentials, sink, config=NO_DELAY)

        assert sink.ids()[0] == [1]
        assert len(sink.events) == 2
        assert sink.events[1].is_completed

    @pytest.mark.asyncio
    async def test_closed_sink_stops_without_completion(self, make_fetcher, credentials, item):
        sink = RecordingSink(close_after=1)
        fetcher = make_fetcher([item(1)], [item(2)], [item(3)])

        await stream_chunks(fetcher, credentials, sink, config=NO_DELAY)

        assert len(sink.events) == 1
        assert not sink.events[0].is_completed
        # Cancellation is noticed at the delay checkpoint, before page 2
        assert len(fetcher.calls) == 1

    @pytest.mark.asyncio
    async def test_inter_chunk_delay_between_chunks(
        self, make_fetcher, credentials, item, monkeypatch
    ):
        delays: list[float] = []

        async def fake_sleep(delay: float) -> None:
            delays.append(delay)

        monkeypatch.setattr(asyncio, "sleep", fake_sleep)
        fetcher = make_fetcher([item(1)], [item(2)], [item(3)])

        await stream_chunks(
            fetcher, credentials, RecordingSink(), config=PagingConfig(inter_chunk_delay=0.05)
        )

        # No delay after the last page
        assert delays == [0.05, 0.05]

    @pytest.mark.asyncio
    async def test_dispatcher_counts_items(self, three_page_source, credentials):
        walker = PageWalker(three_page_source, credentials)
        dispatcher = ChunkDispatcher(walker, RecordingSink(), inter_chunk_delay=0)

        await dispatcher.run()

        assert dispatcher.items_sent == 4


class TestOpenStream:
    """Test streaming on a dedicated task."""

    @pytest.mark.asyncio
    async def test_consumer_reads_until_completion(self, three_page_source, credentials):
        task, channel = open_stream(three_page_source, credentials, config=NO_DELAY)

        chunks = [[i.id for i in event.items] async for event in channel]
        await task

        assert chunks == [[1, 2], [], [5, 6]]

    @pytest.mark.asyncio
    async def test_first_page_failure_wakes_consumer(self, make_fetcher, credentials):
        fetcher = make_fetcher(entries=[TransportError("down")])
        task, channel = open_stream(fetcher, credentials, config=NO_DELAY)

        with pytest.raises(RequestFailedError):
            await channel.receive()
        with pytest.raises(RequestFailedError):
            await task

    @pytest.mark.asyncio
    async def test_consumer_close_cancels_stream(self, make_infinite_fetcher, credentials):
        fetcher = make_infinite_fetcher(page_size=2)
        task, channel = open_stream(fetcher, credentials, config=PagingConfig(inter_chunk_delay=0.01))

        first = await channel.receive()
        channel.close()
        await asyncio.wait_for(task, timeout=1.0)

        assert [i.id for i in first.items] == [0, 1]
        assert task.done() and task.exception() is None
        assert fetcher.calls <= 2

    @pytest.mark.asyncio
    async def test_task_cancel_wakes_consumer(self, make_infinite_fetcher, credentials):
        task, channel = open_stream(
            make_infinite_fetcher(page_size=1), credentials, config=PagingConfig(inter_chunk_delay=10)
        )
        await channel.receive()

        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        # Drain whatever was queued before the cancel, then hit the abort
        with pytest.raises(ChannelClosedError):
            while True:
                await asyncio.wait_for(channel.receive(), timeout=1.0)


class TestChunkChannel:
    """Test the queue-backed channel."""

    @pytest.mark.asyncio
    async def test_send_after_close_raises(self):
        channel = ChunkChannel()
        channel.close()
        assert channel.closed
        with pytest.raises(ChannelClosedError):
            await channel.send(StreamEvent.chunk([], page_index=0))

    @pytest.mark.asyncio
    async def test_collect(self, item):
        channel = ChunkChannel()
        await channel.send(StreamEvent.chunk([item(1)], page_index=0))
        await channel.send(StreamEvent.chunk([], page_index=1))
        await channel.send(StreamEvent.chunk([item(2)], page_index=2))
        await channel.send(StreamEvent.completed(total_items=2, pages=3))

        assert [i.id for i in await channel.collect()] == [1, 2]

    @pytest.mark.asyncio
    async def test_iteration_stops_at_completion_not_empty_chunk(self):
        channel = ChunkChannel()
        await channel.send(StreamEvent.chunk([], page_index=0))
        await channel.send(StreamEvent.completed(total_items=0, pages=1))

        events = [event async for event in channel]

        assert len(events) == 1
        assert events[0].kind is StreamEventKind.CHUNK

    @pytest.mark.asyncio
    async def test_abort_raises_error_to_consumer(self):
        channel = ChunkChannel()
        channel.abort(RuntimeError("producer died"))
        with pytest.raises(RuntimeError, match="producer died"):
            await channel.receive()

    @pytest.mark.asyncio
    async def test_abort_repeats_for_every_receive(self):
        channel = ChunkChannel()
        channel.abort(ChannelClosedError("Stream task cancelled"))

        for _ in range(2):
            with pytest.raises(ChannelClosedError):
                await asyncio.wait_for(channel.receive(), timeout=1.0)

    @pytest.mark.asyncio
    async def test_events_before_abort_still_delivered(self, item):
        channel = ChunkChannel()
        await channel.send(StreamEvent.chunk([item(1)], page_index=0))
        channel.abort(RuntimeError("producer died"))

        assert [i.id for i in (await channel.receive()).items] == [1]
        with pytest.raises(RuntimeError):
            await channel.receive()
