"""PagingAPI facade over a fetcher and a credential provider.

The facade binds one listing (a fetcher) and one credential provider to a
configuration, so call sites only say how much they need and how they want
it delivered. Every call starts its own walk; calls may run concurrently.

Example:
    >>> async with PagingAPI(fetcher, credentials) as api:
    ...     outcome = await api.fetch_until_quota(24)
    ...     more = await api.fetch_until_quota(24, start_cursor=outcome.resume_cursor)
    ...
    ...     task, channel = api.open_stream()
    ...     async for event in channel:
    ...         queue.extend(event.items)
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from ..core.config import PagingConfig
from ..core.protocols import ChunkSink, CredentialProvider, PageFetcher
from ..models import FetchOutcome, FetchQuota
from ..runtime import ChunkChannel
from ..runtime import fetch_all as _fetch_all
from ..runtime import fetch_until_quota as _fetch_until_quota
from ..runtime import open_stream as _open_stream
from ..runtime import stream_chunks as _stream_chunks
from .blocking import run_blocking

logger = logging.getLogger(__name__)


class PagingAPI:
    """High-level facade for paginated, eligibility-filtered fetches."""

    def __init__(
        self,
        fetcher: PageFetcher,
        credentials: CredentialProvider,
        *,
        config: PagingConfig | None = None,
    ) -> None:
        """Initialize facade.

        Args:
            fetcher: Page fetcher for the listing
            credentials: Credential provider shared by all calls
            config: Paging configuration (defaults apply if omitted)
        """
        self._fetcher = fetcher
        self._credentials = credentials
        self._config = config or PagingConfig()

    @property
    def config(self) -> PagingConfig:
        return self._config

    async def fetch_until_quota(
        self,
        minimum_eligible: int,
        *,
        page_size_hint: int | None = None,
        start_cursor: str | None = None,
    ) -> FetchOutcome:
        """Collect at least ``minimum_eligible`` eligible items (fewer if exhausted)."""
        quota = FetchQuota(
            minimum_eligible=minimum_eligible,
            page_size_hint=page_size_hint or self._config.page_size_hint,
        )
        return await _fetch_until_quota(
            self._fetcher,
            self._credentials,
            quota,
            start_cursor=start_cursor,
            config=self._config,
        )

    async def fetch_all(self, *, start_cursor: str | None = None) -> FetchOutcome:
        """Collect every eligible item of the listing."""
        return await _fetch_all(
            self._fetcher, self._credentials, start_cursor=start_cursor, config=self._config
        )

    async def stream_chunks(self, sink: ChunkSink, *, start_cursor: str | None = None) -> None:
        """Stream eligible items page by page into ``sink``."""
        await _stream_chunks(
            self._fetcher,
            self._credentials,
            sink,
            start_cursor=start_cursor,
            config=self._config,
        )

    def open_stream(
        self, *, start_cursor: str | None = None
    ) -> tuple[asyncio.Task[None], ChunkChannel]:
        """Start streaming on a dedicated task and return it with its channel."""
        return _open_stream(
            self._fetcher, self._credentials, start_cursor=start_cursor, config=self._config
        )

    def fetch_until_quota_blocking(self, minimum_eligible: int, **kwargs: Any) -> FetchOutcome:
        """Synchronous ``fetch_until_quota`` for callers without an event loop."""
        return run_blocking(self.fetch_until_quota(minimum_eligible, **kwargs))

    async def close(self) -> None:
        """Close the fetcher if it holds resources."""
        close = getattr(self._fetcher, "close", None)
        if close is not None:
            await close()

    async def __aenter__(self) -> PagingAPI:
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()
