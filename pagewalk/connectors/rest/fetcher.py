"""JSON page fetcher for link-partitioned REST listings.

Many listing endpoints return a JSON object holding a collection of items
and an absolute URL for the next page. The key names differ per service, so
they are constructor arguments here rather than a fixed schema.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from pydantic import ValidationError

from ...core.exceptions import DecodeError
from ...models import Credential, Item, Page
from ...utils.http import HTTPClient

logger = logging.getLogger(__name__)


class RESTPageFetcher:
    """Fetches pages of a link-partitioned JSON listing over HTTP.

    The first page is requested from ``initial_url`` with ``limit`` and
    ``base_params`` as query parameters. Every later page is requested from
    the cursor, which is the absolute URL the previous page pointed to.
    """

    def __init__(
        self,
        initial_url: str,
        client: HTTPClient | None = None,
        *,
        items_key: str = "collection",
        cursor_key: str = "next_href",
        unwrap_keys: Sequence[str] = (),
        auth_scheme: str = "OAuth",
        limit_param: str = "limit",
        base_params: dict[str, Any] | None = None,
    ) -> None:
        """Initialize fetcher.

        Args:
            initial_url: URL of the first page
            client: HTTP client (a private one is created if omitted)
            items_key: Key holding the item list in a page payload
            cursor_key: Key holding the next page URL
            unwrap_keys: Wrapper keys to unwrap, e.g. ``("track",)`` for
                entries shaped ``{"track": {...}}``
            auth_scheme: Scheme prefix of the Authorization header
            limit_param: Query parameter carrying the page size
            base_params: Extra query parameters for the first page
        """
        self._initial_url = initial_url
        self._client = client or HTTPClient()
        self._owns_client = client is None
        self._items_key = items_key
        self._cursor_key = cursor_key
        self._unwrap_keys = tuple(unwrap_keys)
        self._auth_scheme = auth_scheme
        self._limit_param = limit_param
        self._base_params = dict(base_params or {})

    async def fetch_page(
        self,
        cursor: str | None,
        credential: Credential,
        *,
        limit: int | None = None,
    ) -> Page:
        headers = {"Authorization": credential.authorization(self._auth_scheme)}
        if cursor is None:
            params = dict(self._base_params)
            if limit is not None:
                params[self._limit_param] = limit
            logger.debug(f"Fetching first page from {self._initial_url}")
            payload = await self._client.get_json(self._initial_url, params=params, headers=headers)
        else:
            logger.debug(f"Fetching next page from {cursor}")
            payload = await self._client.get_json(cursor, headers=headers)
        return self.parse(payload)

    def parse(self, payload: Any) -> Page:
        """Decode a page payload.

        Entries that fail validation are skipped with a warning; a payload
        without an item list is a decode error.

        Raises:
            DecodeError: If the payload has no item list
        """
        if not isinstance(payload, dict):
            raise DecodeError(f"Expected a JSON object, got {type(payload).__name__}")
        raw_items = payload.get(self._items_key)
        if not isinstance(raw_items, list):
            raise DecodeError(
                f"No '{self._items_key}' list in response (keys: {sorted(payload)})"
            )

        items: list[Item] = []
        for idx, raw in enumerate(raw_items):
            entry = self._unwrap(raw)
            try:
                items.append(Item.model_validate(entry))
            except ValidationError as e:
                logger.warning(f"Skipping item at index {idx}: {e.error_count()} validation errors")

        if len(items) < len(raw_items):
            logger.info(f"Parsed {len(items)} items out of {len(raw_items)} entries")

        try:
            return Page(items=items, continuation=payload.get(self._cursor_key))
        except ValidationError as e:
            raise DecodeError(f"Invalid '{self._cursor_key}' in response: {e}") from e

    def _unwrap(self, raw: Any) -> Any:
        if isinstance(raw, dict):
            for key in self._unwrap_keys:
                nested = raw.get(key)
                if isinstance(nested, dict):
                    return nested
        return raw

    async def close(self) -> None:
        """Close the HTTP client if this fetcher created it."""
        if self._owns_client:
            await self._client.close()
