"""High-level API facade and blocking adapter."""

from .blocking import run_blocking
from .paging_api import PagingAPI

__all__ = ["PagingAPI", "run_blocking"]
