"""Concrete page fetchers."""

from .rest import RESTPageFetcher

__all__ = ["RESTPageFetcher"]
