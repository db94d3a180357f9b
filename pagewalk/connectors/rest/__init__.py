"""REST connector: JSON page fetcher over aiohttp."""

from .fetcher import RESTPageFetcher

__all__ = ["RESTPageFetcher"]
