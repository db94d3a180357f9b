"""Data models for paginated listings.

Architecture:
    Listing payloads (Item, Page, FetchQuota, Credential) are Pydantic v2
    models, frozen so a page cannot be altered after it has been validated.
    Result containers produced by the runtime (FetchOutcome, StreamEvent) are
    plain dataclasses.
"""

from .credential import Credential
from .events import StreamEvent
from .item import Item
from .page import FetchOutcome, FetchQuota, Page

__all__ = [
    "Credential",
    "FetchOutcome",
    "FetchQuota",
    "Item",
    "Page",
    "StreamEvent",
]
