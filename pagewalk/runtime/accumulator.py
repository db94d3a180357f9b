"""Quota-driven accumulation of eligible items.

This module provides the QuotaAccumulator class that pulls pages from a
PageWalker, filters each page, and stops once enough eligible items have
been collected or the listing runs out.
"""

from __future__ import annotations

from ..core.config import PagingConfig
from ..core.protocols import CredentialProvider, PageFetcher
from ..filters import deduplicate, filter_eligible
from ..models import FetchOutcome, FetchQuota, Item
from .telemetry import log_walk_complete
from .walker import PageWalker


class QuotaAccumulator:
    """Builds one aggregated result holding at least N eligible items.

    The quota is checked only between pages, so the last page is always
    taken whole. Deduplication runs once over the whole result because
    upstream pagination can repeat items across page boundaries.
    """

    def __init__(self, walker: PageWalker) -> None:
        """Initialize accumulator.

        Args:
            walker: Walker driving this fetch; owned for the whole run
        """
        self._walker = walker

    async def run(self, quota: FetchQuota | None) -> FetchOutcome:
        """Accumulate until the quota is met or the walk ends.

        Args:
            quota: Minimum eligible items required (0 = first page only,
                None = walk the whole listing)

        Returns:
            FetchOutcome with eligible, deduplicated items and a resume cursor

        Raises:
            FetchError: If the very first page fails
        """
        accumulated: list[Item] = []
        raw_items = 0

        while True:
            page = await self._walker.next_page()
            if page is None:
                break

            raw_items += len(page.items)
            accumulated.extend(filter_eligible(page.items))

            if page.is_last:
                break
            if quota is None:
                continue
            if quota.minimum_eligible == 0:
                break
            if len(accumulated) >= quota.minimum_eligible:
                break

        items = deduplicate(accumulated)
        outcome = FetchOutcome(
            items=items,
            resume_cursor=self._walker.cursor,
            pages_fetched=self._walker.pages_fetched,
            raw_items_seen=raw_items,
        )

        log_walk_complete(
            walk_id=self._walker.walk_id,
            state=self._walker.state,
            pages_fetched=outcome.pages_fetched,
            eligible_items=len(items),
            raw_items=raw_items,
        )
        return outcome


async def fetch_until_quota(
    fetcher: PageFetcher,
    credentials: CredentialProvider,
    quota: FetchQuota,
    *,
    start_cursor: str | None = None,
    config: PagingConfig | None = None,
) -> FetchOutcome:
    """Fetch pages until ``quota.minimum_eligible`` eligible items are collected.

    Later-page failures are not errors: whatever was collected is returned.

    Args:
        fetcher: Page fetcher for the listing
        credentials: Credential provider
        quota: How many eligible items are needed
        start_cursor: Resume cursor from a previous outcome (None = first page)
        config: Paging configuration (defaults apply if omitted)

    Returns:
        FetchOutcome with the collected items and the cursor to resume from

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
        page_size=quota.page_size_hint,
    )
    return await QuotaAccumulator(walker).run(quota)


async def fetch_all(
    fetcher: PageFetcher,
    credentials: CredentialProvider,
    *,
    start_cursor: str | None = None,
    config: PagingConfig | None = None,
) -> FetchOutcome:
    """Walk the whole listing and return every eligible, unique item.

    Same failure policy as ``fetch_until_quota``: a first-page failure
    raises, a later one returns what was collected with a resume cursor.
    """
    config = config or PagingConfig()
    walker = PageWalker(
        fetcher,
        credentials,
        start_cursor=start_cursor,
        retry_policy=config.retry_policy,
        page_size=config.page_size_hint,
    )
    return await QuotaAccumulator(walker).run(None)
