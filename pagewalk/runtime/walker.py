"""Sequential page retrieval with credential refresh.

This module provides the PageWalker class that drives one walk over a
cursor-paginated listing, hiding credential refresh and the per-walk retry
policy behind a single ``next_page`` call.

Failure policy:
    - First page of the walk: any failure raises (``AuthFailedError``,
      ``RequestFailedError`` or ``DecodeFailedError``). Nothing works, so
      there is nothing partial to return.
    - Any later page: the failure ends the walk gracefully. ``next_page``
      returns None and the cause is kept in ``failure``.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import AsyncIterator
from time import perf_counter
from typing import Any

from pydantic import ValidationError

from ..core.config import RetryPolicy
from ..core.enums import WalkState
from ..core.exceptions import (
    AuthError,
    AuthFailedError,
    DecodeError,
    DecodeFailedError,
    FetchError,
    RequestFailedError,
    TransportError,
)
from ..core.protocols import CredentialProvider, PageFetcher
from ..models import Credential, Page
from .telemetry import log_credential_refreshed, log_page_error, log_page_fetched

logger = logging.getLogger(__name__)


class PageWalker:
    """Walks a paginated listing one page at a time.

    The walker owns nothing across calls beyond its current cursor and the
    bookkeeping of the walk it is driving. It is not safe to share one
    walker between concurrent tasks; each fetch session creates its own.
    """

    def __init__(
        self,
        fetcher: PageFetcher,
        credentials: CredentialProvider,
        *,
        start_cursor: str | None = None,
        retry_policy: RetryPolicy | None = None,
        page_size: int | None = None,
        walk_id: str | None = None,
    ) -> None:
        """Initialize page walker.

        Args:
            fetcher: Collaborator that retrieves pages
            credentials: Shared credential provider
            start_cursor: Cursor to resume from (None for the first page)
            retry_policy: Refresh and request retry budget for this walk
            page_size: Page size hint forwarded to the fetcher
            walk_id: Identifier used in logs (random if omitted)
        """
        self._fetcher = fetcher
        self._credentials = credentials
        self._policy = retry_policy or RetryPolicy()
        self._page_size = page_size
        self._cursor = start_cursor
        self.walk_id = walk_id or uuid.uuid4().hex[:12]

        self._state = WalkState.IDLE
        self._pages_fetched = 0
        self._refreshes_used = 0
        self._failure: FetchError | None = None
        self._credential: Credential | None = None

    @property
    def state(self) -> WalkState:
        return self._state

    @property
    def cursor(self) -> str | None:
        """Cursor of the next page to fetch.

        After a later-page failure this is still the continuation of the last
        page that succeeded, so a caller can resume from it.
        """
        return self._cursor

    @property
    def pages_fetched(self) -> int:
        return self._pages_fetched

    @property
    def refreshes_used(self) -> int:
        return self._refreshes_used

    @property
    def failure(self) -> FetchError | None:
        """Error that ended the walk, if it did not end by exhaustion."""
        return self._failure

    async def next_page(self) -> Page | None:
        """Fetch the next page of the walk.

        Returns:
            The decoded page, or None once the walk is over

        Raises:
            AuthFailedError: Credential unavailable on the first page
            RequestFailedError: Request failed on the first page
            DecodeFailedError: Payload undecodable on the first page
        """
        if self._state.is_terminal:
            return None

        page_index = self._pages_fetched
        self._state = WalkState.FETCHING
        start = perf_counter()
        try:
            credential = await self._obtain_credential(page_index)
            page = await self._request(credential, page_index)
        except FetchError as e:
            fatal = page_index == 0
            log_page_error(
                walk_id=self.walk_id,
                page_index=page_index,
                error_type=type(e).__name__,
                error_message=str(e),
                fatal=fatal,
            )
            self._failure = e
            if isinstance(e, AuthFailedError):
                self._state = WalkState.AUTH_FAILED
            elif fatal:
                self._state = WalkState.REQUEST_FAILED
            else:
                # Late failure means we ran out; keep the cursor for resuming
                self._state = WalkState.EXHAUSTED
            if fatal:
                raise
            return None

        self._pages_fetched += 1
        self._cursor = page.continuation
        self._state = WalkState.EXHAUSTED if page.is_last else WalkState.PAGE_READY

        log_page_fetched(
            walk_id=self.walk_id,
            page_index=page_index,
            items=len(page.items),
            has_more=not page.is_last,
            latency_ms=(perf_counter() - start) * 1000.0,
        )
        return page

    async def pages(self) -> AsyncIterator[Page]:
        """Iterate over pages until the walk ends."""
        while True:
            page = await self.next_page()
            if page is None:
                return
            yield page

    async def _obtain_credential(self, page_index: int) -> Credential:
        """Return a usable credential, refreshing at most once per walk.

        The provider's current credential wins. Otherwise the credential this
        walk last obtained is reused while it is unexpired, so a refresh that
        the provider does not report back still carries the rest of the walk.
        """
        credential = self._credentials.current()
        if credential is not None and not credential.is_expired():
            self._credential = credential
            return credential
        if self._credential is not None and not self._credential.is_expired():
            return self._credential

        refresh = getattr(self._credentials, "refresh", None)
        if refresh is None:
            raise AuthFailedError(
                "No valid credential and provider cannot refresh",
                page_index=page_index,
                cursor=self._cursor,
            )
        if self._refreshes_used >= self._policy.max_refreshes_per_walk:
            raise AuthFailedError(
                f"No valid credential and refresh budget spent "
                f"({self._refreshes_used}/{self._policy.max_refreshes_per_walk})",
                page_index=page_index,
                cursor=self._cursor,
            )

        self._refreshes_used += 1
        try:
            credential = await refresh()
        except AuthError as e:
            log_credential_refreshed(walk_id=self.walk_id, page_index=page_index, success=False)
            raise AuthFailedError(
                f"Credential refresh failed: {e}",
                page_index=page_index,
                cursor=self._cursor,
            ) from e

        if credential.is_expired():
            log_credential_refreshed(walk_id=self.walk_id, page_index=page_index, success=False)
            raise AuthFailedError(
                "Credential refresh returned an expired credential",
                page_index=page_index,
                cursor=self._cursor,
            )

        log_credential_refreshed(walk_id=self.walk_id, page_index=page_index, success=True)
        self._credential = credential
        return credential

    async def _request(self, credential: Credential, page_index: int) -> Page:
        """Issue the page request, honouring ``request_retries``."""
        attempts = self._policy.request_retries + 1
        attempt = 0
        while True:
            attempt += 1
            try:
                payload = await self._fetcher.fetch_page(
                    self._cursor, credential, limit=self._page_size
                )
            except (TransportError, OSError, TimeoutError) as e:
                if attempt < attempts:
                    logger.warning(
                        f"Page {page_index} request failed (attempt {attempt}/{attempts}): {e}"
                    )
                    continue
                if isinstance(e, DecodeError):
                    raise DecodeFailedError(
                        f"Could not decode page {page_index}: {e}",
                        page_index=page_index,
                        cursor=self._cursor,
                    ) from e
                raise RequestFailedError(
                    f"Request for page {page_index} failed: {e}",
                    page_index=page_index,
                    cursor=self._cursor,
                    status_code=getattr(e, "status_code", None),
                ) from e
            except Exception as e:
                # Fetcher broke its contract; not retried
                raise RequestFailedError(
                    f"Unexpected {type(e).__name__} fetching page {page_index}: {e}",
                    page_index=page_index,
                    cursor=self._cursor,
                ) from e
            return self._decode(payload, page_index)

    def _decode(self, payload: Any, page_index: int) -> Page:
        if isinstance(payload, Page):
            return payload
        try:
            return Page.model_validate(payload)
        except ValidationError as e:
            raise DecodeFailedError(
                f"Page {page_index} payload is not a page: {e.error_count()} validation errors",
                page_index=page_index,
                cursor=self._cursor,
            ) from e
