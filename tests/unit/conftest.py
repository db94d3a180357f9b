"""Shared fakes for paging unit tests."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

import pytest

from pagewalk.core.exceptions import AuthError
from pagewalk.models import Credential, Item, Page


def build_item(item_id: int | str, eligible: bool = True, **overrides: Any) -> Item:
    """Create an item that passes (or fails) every eligibility rule."""
    fields: dict[str, Any] = {
        "id": item_id,
        "title": f"Track {item_id}",
        "streamable": eligible,
        "stream_url": f"https://stream.example.com/{item_id}" if eligible else None,
    }
    fields.update(overrides)
    return Item(**fields)


class FakeFetcher:
    """Serves a fixed list of pages; an Exception entry is raised instead.

    Page ``i`` is addressed by cursor ``"cursor-i"`` (page 0 by ``None``).
    """

    def __init__(self, entries: list[Page | dict | Exception]) -> None:
        self.entries = entries
        self.calls: list[dict[str, Any]] = []

    async def fetch_page(
        self,
        cursor: str | None,
        credential: Credential,
        *,
        limit: int | None = None,
    ) -> Page | dict:
        self.calls.append({"cursor": cursor, "credential": credential, "limit": limit})
        index = 0 if cursor is None else int(cursor.split("-")[1])
        entry = self.entries[index]
        if isinstance(entry, Exception):
            raise entry
        return entry

    @property
    def cursors(self) -> list[str | None]:
        return [call["cursor"] for call in self.calls]


class InfiniteFetcher:
    """Endless listing of fully eligible pages."""

    def __init__(self, page_size: int) -> None:
        self.page_size = page_size
        self.calls = 0

    async def fetch_page(
        self,
        cursor: str | None,
        credential: Credential,
        *,
        limit: int | None = None,
    ) -> Page:
        index = 0 if cursor is None else int(cursor.split("-")[1])
        self.calls += 1
        start = index * self.page_size
        items = [build_item(start + i) for i in range(self.page_size)]
        return Page(items=items, continuation=f"cursor-{index + 1}")


class FakeCredentials:
    """Credential provider with a scriptable current credential and refresh.

    With ``keep_refreshed=False`` a successful refresh is not reflected by
    ``current()``.
    """

    def __init__(
        self,
        credential: Credential | None = None,
        refreshed: Credential | Exception | None = None,
        keep_refreshed: bool = True,
    ) -> None:
        self.credential = credential
        self.refreshed = refreshed
        self.keep_refreshed = keep_refreshed
        self.refresh_calls = 0

    def current(self) -> Credential | None:
        return self.credential

    async def refresh(self) -> Credential:
        self.refresh_calls += 1
        if isinstance(self.refreshed, Exception):
            raise self.refreshed
        if self.refreshed is None:
            raise AuthError("no refresh token")
        if self.keep_refreshed:
            self.credential = self.refreshed
        return self.refreshed


def paged(*pages: list[Item]) -> list[Page]:
    """Chain item lists into pages linked by ``cursor-i`` continuations."""
    result = []
    for index, items in enumerate(pages):
        continuation = f"cursor-{index + 1}" if index + 1 < len(pages) else None
        result.append(Page(items=items, continuation=continuation))
    return result


@pytest.fixture
def item():
    return build_item


@pytest.fixture
def credential() -> Credential:
    return Credential.expiring_in("token-1", 3600, refresh_token="refresh-1")


@pytest.fixture
def credentials(credential) -> FakeCredentials:
    return FakeCredentials(credential)


@pytest.fixture
def three_page_source() -> FakeFetcher:
    """Pages {1,2} eligible, {3,4} ineligible, {5,6} eligible."""
    return FakeFetcher(
        paged(
            [build_item(1), build_item(2)],
            [build_item(3, eligible=False), build_item(4, eligible=False)],
            [build_item(5), build_item(6)],
        )
    )


@pytest.fixture
def make_fetcher():
    """Build a FakeFetcher from item lists (chained) or explicit entries."""

    def _make(*pages: list[Item], entries: list | None = None) -> FakeFetcher:
        return FakeFetcher(entries if entries is not None else paged(*pages))

    return _make


@pytest.fixture
def make_infinite_fetcher():
    return InfiniteFetcher


@pytest.fixture
def make_credentials():
    return FakeCredentials


@pytest.fixture
def chain():
    return paged


@pytest.fixture
def clock(monkeypatch):
    """Freeze credential expiry checks; advance with ``clock.current += delta``."""

    class FrozenClock(datetime):
        current = datetime.now(UTC)

        @classmethod
        def now(cls, tz=None):
            return cls.current

    monkeypatch.setattr("pagewalk.models.credential.datetime", FrozenClock)
    return FrozenClock
