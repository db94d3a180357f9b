"""Utility functions."""

from .http import HTTPClient
from .retry import retry_async

__all__ = ["HTTPClient", "retry_async"]
